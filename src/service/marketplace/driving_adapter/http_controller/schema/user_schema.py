"""
User API Schemas - Pydantic models for request/response
"""

from pydantic import BaseModel, ConfigDict, SecretStr

from src.service.marketplace.domain.entity.user_entity import UserEntity, UserRole


class CreateUserRequest(BaseModel):
    """Field rules (non-blank, email pattern, role) are enforced by the identity use case"""

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'username': 's1',
                'password': 'pw1',
                'email': 's1@x.com',
                'role': 'seller',
            }
        }
    )

    username: str
    password: SecretStr
    email: str
    role: str = UserRole.BUYER.value


class LoginRequest(BaseModel):
    model_config = ConfigDict(json_schema_extra={'example': {'username': 's1', 'password': 'pw1'}})

    username: str
    password: SecretStr


class UpdateUserFieldRequest(BaseModel):
    """One of username, password, email, role"""

    model_config = ConfigDict(
        json_schema_extra={'example': {'field_name': 'email', 'new_value': 'new@x.com'}}
    )

    field_name: str
    new_value: str


class UserResponse(BaseModel):
    """Never carries the password hash"""

    model_config = ConfigDict(
        json_schema_extra={
            'example': {'id': 1, 'username': 's1', 'email': 's1@x.com', 'role': 'seller'}
        }
    )

    id: int
    username: str
    email: str
    role: UserRole

    @classmethod
    def from_entity(cls, user_entity: UserEntity) -> 'UserResponse':
        return cls(
            id=user_entity.id or 0,
            username=user_entity.username,
            email=user_entity.email,
            role=user_entity.role,
        )
