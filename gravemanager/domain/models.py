from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


@dataclass
class Body:
    """A buried (or not yet buried) person. ``id`` is assigned by the store."""
    name: Optional[str] = None
    gender: Optional[Gender] = None
    born: Optional[dt.date] = None
    died: Optional[dt.date] = None
    vampire: bool = False
    id: Optional[int] = None


@dataclass
class Grave:
    """A grave site addressed by column/row in the cemetery grid."""
    column: int = 0
    row: int = 0
    capacity: int = 1
    note: Optional[str] = None
    id: Optional[int] = None
