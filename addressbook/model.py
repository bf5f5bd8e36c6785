"""Person records, their validated fields and the in-memory address book."""
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time

import tzlocal
from dateutil import parser as dtparser

from addressbook.errors import (
    ConstraintViolationError,
    DuplicatePersonError,
    PersonNotFoundError
)

logger = logging.getLogger(__name__)

# ASCII alphanumeric run, no underscore
_ALNUM = r"[^\W_]+"
_EMAIL_SPECIAL_CHARACTERS = "+_.-"
_EMAIL_LOCAL_PART = (
    rf"{_ALNUM}([{re.escape(_EMAIL_SPECIAL_CHARACTERS)}]{_ALNUM})*")
_EMAIL_DOMAIN_PART = rf"{_ALNUM}(-{_ALNUM})*"
# the last label is at least 2 characters long
_EMAIL_DOMAIN = (
    rf"({_EMAIL_DOMAIN_PART}\.)*(?=[^.]{{2,}}\Z){_EMAIL_DOMAIN_PART}")


def _validated(cls, value):
    """Checks a raw field value against the field's pattern.

    Args:
        cls (type):     the field class, providing PATTERN and
    MESSAGE_CONSTRAINTS.
        value (str):    the raw value.

    Returns:
        value (str):    the unchanged value.

    Raises:
        ConstraintViolationError: if the value does not match.

    """
    if not isinstance(value, str) or not cls.is_valid(value):
        raise ConstraintViolationError(
            cls.__name__.lower(), cls.MESSAGE_CONSTRAINTS)
    return value


@dataclass(frozen=True, order=True)
class Name:
    """A person's name. Also the key persons are looked up by."""
    value: str

    MESSAGE_CONSTRAINTS = (
        "Names should only contain alphanumeric characters and spaces, "
        "and it should not be blank")
    PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9 ]*")

    def __post_init__(self):
        _validated(type(self), self.value)

    @classmethod
    def is_valid(cls, value):
        return cls.PATTERN.fullmatch(value) is not None

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Phone:
    """A person's phone number."""
    value: str

    MESSAGE_CONSTRAINTS = (
        "Phone numbers should only contain numbers, and it should be at "
        "least 3 digits long")
    PATTERN = re.compile(r"[0-9]{3,}")

    def __post_init__(self):
        _validated(type(self), self.value)

    @classmethod
    def is_valid(cls, value):
        return cls.PATTERN.fullmatch(value) is not None

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Email:
    """A person's email address."""
    value: str

    MESSAGE_CONSTRAINTS = (
        "Emails should be of the format local-part@domain and adhere to "
        "the following constraints:\n"
        "1. The local-part should only contain alphanumeric characters and "
        "these special characters, excluding the parentheses, "
        f"({_EMAIL_SPECIAL_CHARACTERS}). The local-part may not start or "
        "end with any special characters.\n"
        "2. This is followed by a '@' and then a domain name. The domain "
        "name is made up of domain labels separated by periods.\n"
        "The domain name must:\n"
        "    - end with a domain label at least 2 characters long\n"
        "    - have each domain label start and end with alphanumeric "
        "characters\n"
        "    - have each domain label consist of alphanumeric characters, "
        "separated only by hyphens, if any.")
    PATTERN = re.compile(f"{_EMAIL_LOCAL_PART}@{_EMAIL_DOMAIN}", re.ASCII)

    def __post_init__(self):
        _validated(type(self), self.value)

    @classmethod
    def is_valid(cls, value):
        return cls.PATTERN.fullmatch(value) is not None

    def __str__(self):
        return self.value


@dataclass(frozen=True, order=True)
class Tag:
    """A single alphanumeric label attached to a person."""
    value: str

    MESSAGE_CONSTRAINTS = "Tags names should be alphanumeric"
    PATTERN = re.compile(r"[A-Za-z0-9]+")

    def __post_init__(self):
        _validated(type(self), self.value)

    @classmethod
    def is_valid(cls, value):
        return cls.PATTERN.fullmatch(value) is not None

    def __str__(self):
        return f"[{self.value}]"


def datetime_or_none(timestr):
    """Verify a datetime object or a datetime string and return a
    datetime object in the local timezone, or None.

    Args:
        timestr (str, date or datetime): a date, datetime or datetime
    string.

    Returns:
        timeobj (datetime): a valid datetime object or None.

    """
    ltz = tzlocal.get_localzone()
    if isinstance(timestr, datetime):
        timeobj = timestr.astimezone(tz=ltz)
    elif isinstance(timestr, date):
        timeobj = datetime.combine(timestr, time()).astimezone(tz=ltz)
    else:
        try:
            timeobj = dtparser.parse(timestr).astimezone(tz=ltz)
        except (TypeError, ValueError, OverflowError, dtparser.ParserError):
            timeobj = None
    return timeobj


def format_timestamp(timeobj):
    """Convert a datetime obj to a "%Y-%m-%d[ %H:%M]" string."""
    if timeobj.strftime("%H:%M") == "00:00":
        return timeobj.strftime("%Y-%m-%d")
    return timeobj.strftime("%Y-%m-%d %H:%M")


@dataclass(frozen=True)
class Booking:
    """A booking held by a person. Editing a person never changes it."""
    description: str
    start: datetime
    end: datetime = None

    @classmethod
    def from_dict(cls, data):
        """Builds a Booking from parsed file data.

        Args:
            data (dict):    'description', 'start' and optional 'end'.

        Returns:
            booking (Booking or None):  the booking, or None if the
        description or start time is missing or invalid.

        """
        description = data.get('description')
        start = datetime_or_none(data.get('start'))
        end = datetime_or_none(data.get('end')) if data.get('end') else None
        if not description or not start:
            return None
        return cls(str(description), start, end)

    def __str__(self):
        text = f"{self.description} ({format_timestamp(self.start)}"
        if self.end:
            text += f" - {format_timestamp(self.end)}"
        return text + ")"


@dataclass(frozen=True)
class Person:
    """A person in the address book.

    Field values are immutable; ``tags`` is always a frozenset and
    ``bookings`` always a tuple.

    """
    name: Name
    phone: Phone
    email: Email
    tags: frozenset = field(default_factory=frozenset)
    bookings: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, 'tags', frozenset(self.tags))
        object.__setattr__(self, 'bookings', tuple(self.bookings))

    def is_same_person(self, other):
        """Returns True if both persons have the same name. This is a
        weaker notion of equality than __eq__.

        """
        return other is not None and other.name == self.name

    def sorted_tags(self):
        return sorted(self.tags)


def show_all_persons(person):
    """Filter predicate that matches every person."""
    return True


SHOW_ALL_PERSONS = show_all_persons


class AddressBook():
    """The list of persons and the filter currently applied to it.

    Attributes:
        persons (list):     all persons, in insertion order.
        predicate (func):   the active filter.

    """
    def __init__(self, persons=None):
        """Initializes an AddressBook() object."""
        self.persons = []
        self.predicate = SHOW_ALL_PERSONS
        for person in persons or []:
            self.add_person(person)

    @property
    def filtered_persons(self):
        """The persons matching the active filter, in order."""
        return [person for person in self.persons if self.predicate(person)]

    def has_person(self, person):
        """Returns True if a person with the same identity exists."""
        return any(person.is_same_person(p) for p in self.persons)

    def add_person(self, person):
        """Adds a person.

        Raises:
            DuplicatePersonError: if the person already exists.

        """
        if self.has_person(person):
            raise DuplicatePersonError()
        self.persons.append(person)

    def set_person(self, target, edited):
        """Replaces ``target`` with ``edited`` in place.

        Args:
            target (Person):    a person in the address book.
            edited (Person):    the replacement.

        Raises:
            PersonNotFoundError: if ``target`` is not in the book.
            DuplicatePersonError: if ``edited`` has the identity of
        another person in the book.

        """
        try:
            index = self.persons.index(target)
        except ValueError:
            raise PersonNotFoundError(target.name) from None
        if not target.is_same_person(edited) and self.has_person(edited):
            raise DuplicatePersonError()
        self.persons[index] = edited
        logger.debug("replaced %s with %s", target.name, edited.name)

    def update_filter(self, predicate):
        """Sets the filter applied to ``filtered_persons``."""
        self.predicate = predicate
