from pydantic import BaseModel


class StoreStatusOut(BaseModel):
    isOpen: bool
