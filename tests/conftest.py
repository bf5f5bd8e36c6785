"""Shared fixtures: a set of typical persons and an address book."""
import pytest

from addressbook.commands import EditPersonDescriptor
from addressbook.model import (
    AddressBook,
    Booking,
    Email,
    Name,
    Person,
    Phone,
    Tag,
    datetime_or_none
)

VALID_NAME_AMY = "Amy Bee"
VALID_NAME_BOB = "Bob Choo"
VALID_PHONE_AMY = "11111111"
VALID_PHONE_BOB = "22222222"
VALID_EMAIL_AMY = "amy@example.com"
VALID_EMAIL_BOB = "bob@example.com"
VALID_TAG_HUSBAND = "husband"
VALID_TAG_FRIEND = "friend"


def make_person(name, phone, email, tags=(), bookings=()):
    return Person(
        Name(name),
        Phone(phone),
        Email(email),
        frozenset(Tag(tag) for tag in tags),
        tuple(bookings))


def make_descriptor(name=None, phone=None, email=None, tags=None):
    """Builds an EditPersonDescriptor from raw strings."""
    return EditPersonDescriptor(
        name=Name(name) if name is not None else None,
        phone=Phone(phone) if phone is not None else None,
        email=Email(email) if email is not None else None,
        tags=(frozenset(Tag(tag) for tag in tags)
              if tags is not None else None))


@pytest.fixture
def booking():
    return Booking(
        "Meeting room 2",
        datetime_or_none("2024-03-01 10:00"),
        datetime_or_none("2024-03-01 12:00"))


@pytest.fixture
def typical_persons(booking):
    return [
        make_person("Alice Pauline", "94351253", "alice@example.com",
                    ["friends"], [booking]),
        make_person("Benson Meier", "98765432", "johnd@example.com",
                    ["owesMoney", "friends"]),
        make_person("Carl Kurz", "95352563", "heinz@example.com"),
        make_person("Daniel Meier", "87652533", "cornelia@example.com",
                    ["friends"]),
        make_person("Elle Meyer", "9482224", "werner@example.com"),
        make_person("Fiona Kunz", "9482427", "lydia@example.com"),
        make_person("George Best", "9482442", "anna@example.com"),
    ]


@pytest.fixture
def address_book(typical_persons):
    return AddressBook(typical_persons)
