from typing import Optional, Union
from enum import Enum


class Gender(str, Enum):
    """Grammatical gender of a mention or a mention chain.

    An unknown gender is represented by ``None`` rather than by a
    member of this enum.
    """

    MALE = "male"
    FEMALE = "female"
    IT = "it"

    def __str__(self) -> str:
        return self.value


def as_gender(value: Optional[Union[str, Gender]]) -> Optional[Gender]:
    """Convert ``value`` to a :class:`Gender`

    :param value: a :class:`Gender`, one of its string values
        (``'male'``, ``'female'``, ``'it'``) or ``None``
    :raise ValueError: if ``value`` is not a known gender
    """
    if value is None or isinstance(value, Gender):
        return value
    try:
        return Gender(value.lower())
    except (ValueError, AttributeError):
        raise ValueError(
            f"unknown gender: {value} (known genders: {[g.value for g in Gender]})"
        )
