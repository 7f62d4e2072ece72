from enum import IntEnum


class Weekday(IntEnum):
    """
    Day of week with the same numbering as datetime.weekday() (Monday = 0).

    Promotion rows in the POS database store applicable days as a JSON list
    that counts from Sunday = 0; use from_sunday_index() to convert them.
    """

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def from_sunday_index(cls, value: int) -> 'Weekday':
        """
        Convert a Sunday-based day number (0 = Sunday ... 6 = Saturday).

        Raises:
            ValueError: If value is outside 0..6

        Examples:
            >>> Weekday.from_sunday_index(0)
            <Weekday.SUNDAY: 6>
            >>> Weekday.from_sunday_index(1)
            <Weekday.MONDAY: 0>
        """
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 6:
            raise ValueError(f"Invalid day number '{value}'. Expected an integer 0 (Sunday) to 6 (Saturday)")
        return cls((value - 1) % 7)

    def to_sunday_index(self) -> int:
        return (self.value + 1) % 7
