"""Read-only view of the signed-in user handed to screens and pages."""

from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from models.users import AppRole, Profile, User

ADMIN_ROLES = (AppRole.club_mentor, AppRole.student_coordinator)
SESSION_KEY = "user_id"


@dataclass(frozen=True)
class AuthContext:
    user_id: Optional[int] = None
    profile: Optional[dict] = None
    is_admin: bool = False

    @property
    def is_authenticated(self):
        return self.user_id is not None

    @property
    def display_name(self):
        if self.profile:
            return self.profile["name"]
        return None

    @property
    def role_label(self):
        if not self.profile:
            return ""
        return self.profile["role"].replace("_", " ")


ANONYMOUS = AuthContext()


def context_for_user(db, user_id):
    if user_id is None:
        return ANONYMOUS
    profile = db.query(Profile).filter(Profile.user_id == user_id).first()
    if profile is None:
        return AuthContext(user_id=user_id)
    return AuthContext(
        user_id=user_id,
        profile={
            "name": profile.name,
            "role": profile.role.value,
            "phone": profile.phone,
        },
        is_admin=profile.role in ADMIN_ROLES,
    )


def authenticate(db, email, password):
    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if user and check_password_hash(user.password_hash, password):
        return user
    return None


def create_account(db, email, password, name, role=AppRole.student, phone=None):
    user = User(email=email.strip().lower(), password_hash=generate_password_hash(password))
    db.add(user)
    db.flush()
    db.add(Profile(user_id=user.id, name=name, role=role, phone=phone))
    db.commit()
    db.refresh(user)
    return user
