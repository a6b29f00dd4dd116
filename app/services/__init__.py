from app.services.users import create_user, delete_user, get_user, list_users, update_user

__all__ = ["create_user", "delete_user", "get_user", "list_users", "update_user"]
