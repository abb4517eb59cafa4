from __future__ import annotations

import datetime as dt
from typing import Callable

from ..errors import ContractViolationError, ValidationError
from .models import Body, Grave

# 注入的时钟：无参调用返回“今天”，测试中可固定日期
Clock = Callable[[], dt.date]


def system_clock() -> dt.date:
    return dt.date.today()


def fixed_clock(today: dt.date) -> Clock:
    return lambda: today


def validate_body(body: Body | None, clock: Clock) -> None:
    """Check Body field rules in a fixed order; raise on the first violation."""
    if body is None:
        raise ContractViolationError("body is null")
    if body.name is None:
        raise ValidationError("name is null")
    if body.gender is None:
        raise ValidationError("gender is null")
    if body.born is not None and body.died is not None and body.died < body.born:
        raise ValidationError("died is before born")
    today = clock()
    if body.born is not None and body.born > today:
        raise ValidationError("born is in future")
    if body.died is not None and body.died > today:
        raise ValidationError("died is in future")


def validate_grave(grave: Grave | None) -> None:
    if grave is None:
        raise ContractViolationError("grave is null")
    if grave.column < 0:
        raise ValidationError("column is negative number")
    if grave.row < 0:
        raise ValidationError("row is negative number")
    if grave.capacity <= 0:
        raise ValidationError("capacity is not positive number")
