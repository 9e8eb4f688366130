from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from app.schemas.auth import SignupRequest, RefreshTokenRequest
from app.schemas.users import UserOut
from app.core.security import hash_password, create_access_token, create_refresh_token, verify_password, decode_refresh_token
from app.database.connection import get_mongo_db
from app.database.crud import create_user, get_user_by_email, get_user_by_id
from app.database.models import UserModel
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/signup", status_code=201)
async def signup(data: SignupRequest, db = Depends(get_mongo_db)):
    existing_user = await get_user_by_email(db, data.email)
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    # No plan yet; the user picks a trial or a paid plan from billing
    user = UserModel(
        email=data.email,
        password=hash_password(data.password),
        status="inactive",
    )
    user_id = await create_user(db, user)
    logger.info(f"User {user_id} signed up")

    return {
        "message": "Registration successful. Choose a plan to start chatting.",
        "user_id": user_id
    }


@router.post("/login")
async def login(form_data: OAuth2PasswordRequestForm = Depends(), db = Depends(get_mongo_db)):
    user = await get_user_by_email(db, form_data.username)

    if not user or not verify_password(form_data.password, user["password"]):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials")

    access_token = create_access_token({"sub": str(user["_id"])})
    refresh_token = create_refresh_token({"sub": str(user["_id"])})
    content = {
        "user": UserOut.from_doc(user),
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
    }
    return JSONResponse(content=jsonable_encoder(content), status_code=status.HTTP_200_OK)


@router.post("/refresh")
async def refresh_token(data: RefreshTokenRequest, db = Depends(get_mongo_db)):
    payload = decode_refresh_token(data.refresh_token)

    user = await get_user_by_id(db, payload.get("sub"))
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    new_access_token = create_access_token({"sub": str(user["_id"])})

    return JSONResponse(
        content={"access_token": new_access_token, "token_type": "bearer"},
        status_code=status.HTTP_200_OK
    )
