from app.schemas.user import ErrorSchema, MessageSchema, UserInSchema, UserOutSchema

__all__ = [
    "ErrorSchema",
    "MessageSchema",
    "UserInSchema",
    "UserOutSchema",
]
