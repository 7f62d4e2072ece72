import json
from datetime import time

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from enums.weekday import Weekday
from models.base import Base


class Promotion(Base):
    """
    Bundle promotion ("2x1", "3x2") as stored by the POS admin.

    applicable_days holds a JSON list of Sunday-based day numbers
    (e.g. "[1,2,3]" for Monday to Wednesday); NULL means every day.
    start_time / end_time are "HH:MM" strings; the window applies only
    when both are set.
    """
    __tablename__ = 'promotions'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    items_required = Column(Integer, nullable=False)
    items_free = Column(Integer, nullable=False, default=1)
    applicable_days = Column(Text, nullable=True)
    start_time = Column(String(5), nullable=True)
    end_time = Column(String(5), nullable=True)

    items = relationship('PromotionItem', back_populates='promotion', cascade='all, delete-orphan')

    __table_args__ = (
        CheckConstraint('items_required > 0', name='check_items_required_positive'),
        CheckConstraint('items_free > 0', name='check_items_free_positive'),
    )


class PromotionItem(Base):
    __tablename__ = 'promotion_items'

    id = Column(Integer, primary_key=True, autoincrement=True)
    promotion_id = Column(Integer, ForeignKey('promotions.id', ondelete='CASCADE'), nullable=False)
    menu_item_id = Column(Integer, nullable=False)

    promotion = relationship('Promotion', back_populates='items')


def _parse_time(value) -> time | None:
    if value is None or isinstance(value, time):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        hours, minutes = text.split(":")[:2]
        return time(int(hours), int(minutes))
    except ValueError:
        raise ValueError(f"Invalid time '{value}'. Expected HH:MM")


class PromotionRuleDTO(BaseModel):
    """
    Validated, typed promotion rule consumed by the discount engine.

    Loosely typed catalog values are parsed here once:
    - weekdays: None, a JSON string or a list of Sunday-based integers
      become frozenset[Weekday]; Weekday members are kept as they are
    - start_time / end_time: "HH:MM" strings become datetime.time
    """
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    active: bool = True
    product_ids: frozenset[int] = Field(default_factory=frozenset)
    items_required: int = Field(ge=1)
    items_free: int = Field(default=1, ge=1)
    weekdays: frozenset[Weekday] | None = None
    start_time: time | None = None
    end_time: time | None = None

    @field_validator("weekdays", mode="before")
    @classmethod
    def parse_weekdays(cls, value):
        if value is None:
            return None
        if isinstance(value, str):
            if not value.strip():
                return None
            # an unreadable day list rejects the rule instead of widening it to every day
            try:
                value = json.loads(value)
            except json.JSONDecodeError:
                raise ValueError(f"Invalid day list '{value}'")
            if value is None:
                return None
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise ValueError(f"Invalid day list '{value}'")
        days = set()
        for day in value:
            if isinstance(day, Weekday):
                days.add(day)
            else:
                days.add(Weekday.from_sunday_index(day))
        return frozenset(days)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time(cls, value):
        return _parse_time(value)

    @model_validator(mode="after")
    def check_window(self):
        if (self.start_time is None) != (self.end_time is None):
            raise ValueError("Time window needs both start_time and end_time")
        return self

    @property
    def has_time_window(self) -> bool:
        return self.start_time is not None and self.end_time is not None
