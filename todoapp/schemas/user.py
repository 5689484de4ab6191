# todoapp/schemas/user.py
from datetime import datetime

from pydantic import Field, field_validator

from todoapp.models.user import ROLES_BY_CODE, RoleType
from todoapp.schemas.base import MAX_ID, CamelModel



class UserCreate(CamelModel):
    role: RoleType = RoleType.USER
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=6)
    created_by: int = Field(0, ge=0, le=MAX_ID)

    @field_validator("role", mode="before")
    @classmethod
    def parse_role(cls, v):
        # Accept "User"/"Admin" in any case as well as their numeric values
        if isinstance(v, int) and not isinstance(v, bool):
            if v in ROLES_BY_CODE:
                return ROLES_BY_CODE[v]
            raise ValueError("Role must be User or Admin")
        if isinstance(v, str):
            for role in RoleType:
                if role.value.lower() == v.strip().lower():
                    return role
            raise ValueError("Role must be User or Admin")
        return v


class UserLogin(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserProfile(CamelModel):
    user_id: int
    role: RoleType
    first_name: str
    last_name: str
    username: str


class UserOut(UserProfile):
    created_date: datetime
