"""Persons used when the data directory holds none."""
from addressbook.model import (
    Booking,
    Email,
    Name,
    Person,
    Phone,
    Tag,
    datetime_or_none
)


def _person(name, phone, email, tags=(), bookings=()):
    return Person(
        Name(name),
        Phone(phone),
        Email(email),
        frozenset(Tag(tag) for tag in tags),
        tuple(Booking(desc, datetime_or_none(start), datetime_or_none(end))
              for desc, start, end in bookings))


def sample_persons():
    """Returns the sample persons.

    Returns:
        persons (list): a list of Person objects.

    """
    return [
        _person("Alex Yeoh", "87438807", "alexyeoh@example.com",
                ["friends"],
                [("Meeting room 2", "2024-03-01 10:00", "2024-03-01 12:00")]),
        _person("Bernice Yu", "99272758", "berniceyu@example.com",
                ["colleagues", "friends"]),
        _person("Charlotte Oliveiro", "93210283", "charlotte@example.com",
                ["neighbours"]),
        _person("David Li", "91031282", "lidavid@example.com",
                ["family"],
                [("Tennis court", "2024-03-09 08:00", "2024-03-09 09:30")]),
        _person("Irfan Ibrahim", "92492021", "irfan@example.com",
                ["classmates"]),
        _person("Roy Balakrishnan", "92624417", "royb@example.com",
                ["colleagues"]),
    ]
