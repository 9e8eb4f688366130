# app/database/crud.py

from typing import List, Dict, Any, Optional
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING
from datetime import datetime
from app.database.models import UserModel, ChatModel, MessageModel, PaymentModel


def to_object_id(value) -> Optional[ObjectId]:
    """Parse a path/body id; malformed ids are treated as missing documents."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None

def serialize_doc(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if doc is None:
        return None
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    return doc


# --- Users CRUD ---
async def create_user(db, user: UserModel) -> str:
    result = await db["users"].insert_one(user.model_dump())
    return str(result.inserted_id)

async def get_user_by_id(db, user_id) -> Optional[Dict[str, Any]]:
    oid = to_object_id(user_id)
    if oid is None:
        return None
    return await db["users"].find_one({"_id": oid})

async def get_user_by_email(db, email: str) -> Optional[Dict[str, Any]]:
    return await db["users"].find_one({"email": email})

async def update_user(db, user_id, fields: Dict[str, Any]) -> bool:
    fields = {**fields, "updated_at": datetime.utcnow()}
    result = await db["users"].update_one({"_id": to_object_id(user_id)}, {"$set": fields})
    return result.matched_count > 0

async def get_users_by_status(db, status: str) -> List[Dict[str, Any]]:
    cursor = db["users"].find({"status": status}).sort("updated_at", ASCENDING)
    return await cursor.to_list(length=None)


# --- Chats CRUD ---
async def create_chat(db, user_id: str, title: Optional[str] = None) -> Dict[str, Any]:
    chat = ChatModel(user_id=user_id, title=title or "Untitled Chat")
    doc = chat.model_dump()
    result = await db["chats"].insert_one(doc)
    doc["_id"] = result.inserted_id
    return doc

async def get_chat_for_user(db, chat_id, user_id: str) -> Optional[Dict[str, Any]]:
    """Returns the chat only when it belongs to `user_id`."""
    oid = to_object_id(chat_id)
    if oid is None:
        return None
    return await db["chats"].find_one({"_id": oid, "user_id": user_id})

async def get_chats_by_user(db, user_id: str) -> List[Dict[str, Any]]:
    cursor = db["chats"].find({"user_id": user_id}).sort("created_at", DESCENDING)
    return await cursor.to_list(length=None)

async def count_chats_by_user(db, user_id: str) -> int:
    return await db["chats"].count_documents({"user_id": user_id})

async def set_chat_file(db, chat_id, file_name: str, file_content: str) -> bool:
    result = await db["chats"].update_one(
        {"_id": to_object_id(chat_id)},
        {"$set": {
            "file_content": file_content,
            "file_name": file_name,
            "file_uploaded_at": datetime.utcnow(),
        }}
    )
    return result.matched_count > 0

async def delete_chat(db, chat_id) -> bool:
    oid = to_object_id(chat_id)
    await db["messages"].delete_many({"chat_id": str(oid)})
    result = await db["chats"].delete_one({"_id": oid})
    return result.deleted_count > 0


# --- Messages CRUD ---
async def create_message(db, chat_id, role: str, text: str) -> Dict[str, Any]:
    message = MessageModel(chat_id=str(chat_id), role=role, text=text)
    doc = message.model_dump()
    result = await db["messages"].insert_one(doc)
    doc["_id"] = result.inserted_id
    return doc

async def get_messages_by_chat(db, chat_id) -> List[Dict[str, Any]]:
    """Messages of a chat, oldest first."""
    cursor = db["messages"].find({"chat_id": str(chat_id)}).sort("created_at", ASCENDING)
    return await cursor.to_list(length=None)

async def delete_message(db, message_id) -> bool:
    result = await db["messages"].delete_one({"_id": to_object_id(message_id)})
    return result.deleted_count > 0


# --- Payments CRUD ---
async def create_payment(db, payment: PaymentModel) -> str:
    result = await db["payments"].insert_one(payment.model_dump())
    return str(result.inserted_id)

async def get_latest_pending_payment(db, user_id: str) -> Optional[Dict[str, Any]]:
    cursor = db["payments"].find({"user_id": user_id, "status": "pending"}).sort("created_at", DESCENDING)
    payments = await cursor.to_list(length=1)
    return payments[0] if payments else None

async def update_payment_status(db, payment_id, status: str) -> bool:
    result = await db["payments"].update_one(
        {"_id": to_object_id(payment_id)},
        {"$set": {"status": status, "reviewed_at": datetime.utcnow()}}
    )
    return result.matched_count > 0
