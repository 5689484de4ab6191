# todoapp/routers/users.py
from fastapi import APIRouter, Depends

from todoapp.handlers.users import CreateUserRequest, LoginUserRequest
from todoapp.mediator import Mediator, get_mediator
from todoapp.schemas import ProblemDetails, UserCreate, UserLogin, UserOut, UserProfile

router = APIRouter()


@router.post("", response_model=UserOut, responses={400: {"model": ProblemDetails}})
def create_user(user: UserCreate, mediator: Mediator = Depends(get_mediator)):
    """Create a new user. Usernames are unique (case-sensitive)."""
    return mediator.send(CreateUserRequest(
        role=user.role,
        first_name=user.first_name,
        last_name=user.last_name,
        username=user.username,
        password=user.password,
        created_by=user.created_by,
    ))


@router.post(
    "/login",
    response_model=UserProfile,
    responses={400: {"model": ProblemDetails}, 401: {"model": ProblemDetails}},
)
def login(credentials: UserLogin, mediator: Mediator = Depends(get_mediator)):
    """
    Check a username and password and return the user's profile.

    No token or session is issued; callers keep the returned user id.
    """
    return mediator.send(LoginUserRequest(
        username=credentials.username,
        password=credentials.password,
    ))
