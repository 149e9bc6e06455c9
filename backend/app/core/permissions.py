from app.db.models.user import Role

# action -> roles allowed to perform it; actions not listed here are denied
PERMISSIONS: dict[str, tuple[Role, ...]] = {
    "workItem.create": (Role.admin, Role.manager, Role.copilot),
}

def is_allowed(action: str, role: str) -> bool:
    return any(r.value == role for r in PERMISSIONS.get(action, ()))
