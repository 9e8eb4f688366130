from pydantic_settings import BaseSettings
from typing import List, Optional
from urllib.parse import quote_plus

class Settings(BaseSettings):
    PROJECT_NAME: str = "BuzAI API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # MongoDB settings
    MONGO_USER: str
    MONGO_PASS: str
    MONGO_CLUSTER: str
    DB_NAME: str


    @property
    def MONGO_URI(self):
        user = quote_plus(self.MONGO_USER)
        passwd = quote_plus(self.MONGO_PASS)
        return f"mongodb+srv://{user}:{passwd}@{self.MONGO_CLUSTER}/{self.DB_NAME}?retryWrites=true&w=majority"


    # JWT settings
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    JWT_REFRESH_SECRET_KEY: str

    # CORS settings
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Emails allowed into the payment approval panel
    ADMIN_EMAILS: List[str] = []

    # OpenAI / Gemini API Key (configure the one matching LLM_MODEL_NAME)
    OPENAI_API_KEY: Optional[str] = None
    GOOGLE_API_KEY: Optional[str] = None

    # LLM settings
    LLM_MODEL_NAME: str = "gpt-4o-mini" # or "gemini-1.5-flash"
    LLM_TEMPERATURE: float = 0.8
    LLM_MAX_TOKENS: int = 2000
    FILE_CONTEXT_CHAR_LIMIT: int = 5000 # Uploaded file characters sent with each prompt

    # Uploads
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    class Config:
        env_file = ".env"

settings = Settings()
