# casetasks/schemas/tokens.py
from pydantic import BaseModel

from casetasks.schemas.user import UserOut


class AuthOut(BaseModel):
    user: UserOut
    token: str
