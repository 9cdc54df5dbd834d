import datetime as dt
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel


@dataclass
class Address:
    city: str
    zip_code: int


@dataclass
class CreateOrder:
    product: str
    quantity: int
    address: Address


class Account(BaseModel):
    login: str
    active: bool
    created: dt.datetime


@dataclass
class Category:
    name: str
    parent: Optional["Category"]
