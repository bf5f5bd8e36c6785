"""Executable address book commands."""
import logging
from dataclasses import dataclass

from addressbook.errors import DuplicatePersonError, PersonNotFoundError
from addressbook.model import SHOW_ALL_PERSONS, Person
from addressbook.syntax import (
    PREFIX_EMAIL,
    PREFIX_NAME,
    PREFIX_PHONE,
    PREFIX_TAG
)

logger = logging.getLogger(__name__)


def format_person(person):
    """Formats a person for display to the user.

    Args:
        person (Person):    the person to format.

    Returns:
        text (str): '<name>; Phone: <phone>; Email: <email>; Tags: [a][b]'.

    """
    tags = ''.join(str(tag) for tag in person.sorted_tags())
    return (
        f"{person.name}; Phone: {person.phone}; "
        f"Email: {person.email}; Tags: {tags}")


def usage(command_word, description, parameters, example):
    """Builds the usage text for a command."""
    text = f"{command_word}: {description}"
    if parameters:
        text += f"\nParameters: {parameters}"
    return text + f"\nExample: {example}"


@dataclass(frozen=True)
class CommandResult:
    """The outcome of executing a command.

    Attributes:
        feedback (str):     the message shown to the user.
        show_help (bool):   the front end should show help.
        exit (bool):        the front end should exit.

    """
    feedback: str
    show_help: bool = False
    exit: bool = False


class Command():
    """Base class for commands."""

    COMMAND_WORD = None
    MESSAGE_USAGE = None

    def execute(self, address_book):
        """Executes the command against an address book.

        Args:
            address_book (AddressBook): the address book to operate on.

        Returns:
            result (CommandResult): the feedback for the user.

        Raises:
            CommandError: if the command cannot be applied.

        """
        raise NotImplementedError


@dataclass(frozen=True)
class EditPersonDescriptor:
    """The details to edit a person with.

    A field left as None keeps the person's current value. ``tags`` set
    to an empty frozenset clears all tags.

    """
    name: object = None
    phone: object = None
    email: object = None
    tags: frozenset = None

    def __post_init__(self):
        if self.tags is not None:
            object.__setattr__(self, 'tags', frozenset(self.tags))

    def is_any_field_edited(self):
        """Returns True if at least one field is edited."""
        return any(value is not None for value in (
            self.name, self.phone, self.email, self.tags))

    def apply_to(self, person):
        """Returns a copy of ``person`` with this descriptor's fields
        applied. Bookings are carried over unchanged.

        """
        return Person(
            name=self.name if self.name is not None else person.name,
            phone=self.phone if self.phone is not None else person.phone,
            email=self.email if self.email is not None else person.email,
            tags=self.tags if self.tags is not None else person.tags,
            bookings=person.bookings)


class EditCommand(Command):
    """Edits the details of an existing person, found by name."""

    COMMAND_WORD = "edit"
    MESSAGE_USAGE = usage(
        COMMAND_WORD,
        "Edits the details of the person identified by their name. "
        "Existing values will be overwritten by the input values.",
        f"{PREFIX_NAME}OLD_NAME [{PREFIX_NAME}NEW_NAME] [{PREFIX_PHONE}PHONE] "
        f"[{PREFIX_EMAIL}EMAIL] [{PREFIX_TAG}TAG]...",
        f"{COMMAND_WORD} {PREFIX_NAME}John Doe {PREFIX_NAME}Jane Doe "
        f"{PREFIX_PHONE}91234567 {PREFIX_EMAIL}janedoe@example.com")

    MESSAGE_EDIT_PERSON_SUCCESS = "Edited Person: {}"

    def __init__(self, old_name, descriptor):
        """Initializes an EditCommand() object.

        Args:
            old_name (Name):    the name of the person to edit.
            descriptor (EditPersonDescriptor): the details to edit with.

        """
        self.old_name = old_name
        self.descriptor = descriptor

    def execute(self, address_book):
        logger.info("executing edit for person: %s", self.old_name)
        person = next(
            (p for p in address_book.filtered_persons
             if p.name == self.old_name), None)
        if person is None:
            logger.info(
                "invalid name provided, person not found: %s", self.old_name)
            raise PersonNotFoundError(self.old_name)

        edited = self.descriptor.apply_to(person)
        if (not person.is_same_person(edited)
                and address_book.has_person(edited)):
            logger.info(
                "attempted to edit person %s to duplicate: %s",
                person.name, edited.name)
            raise DuplicatePersonError()

        address_book.set_person(person, edited)
        address_book.update_filter(SHOW_ALL_PERSONS)
        logger.info("successfully edited person: %s", edited.name)
        return CommandResult(
            self.MESSAGE_EDIT_PERSON_SUCCESS.format(format_person(edited)))

    def __eq__(self, other):
        if not isinstance(other, EditCommand):
            return NotImplemented
        return (self.old_name == other.old_name
                and self.descriptor == other.descriptor)

    def __hash__(self):
        return hash((self.old_name, self.descriptor))

    def __repr__(self):
        return (f"EditCommand(old_name={self.old_name!r}, "
                f"descriptor={self.descriptor!r})")


class ListCommand(Command):
    """Lists all persons."""

    COMMAND_WORD = "list"
    MESSAGE_USAGE = usage(
        COMMAND_WORD, "Lists all persons in the address book.",
        None, COMMAND_WORD)
    MESSAGE_SUCCESS = "Listed all persons"

    def execute(self, address_book):
        address_book.update_filter(SHOW_ALL_PERSONS)
        return CommandResult(self.MESSAGE_SUCCESS)

    def __eq__(self, other):
        return isinstance(other, ListCommand)

    def __hash__(self):
        return hash(self.COMMAND_WORD)


class NameContainsKeywords():
    """Matches persons whose name contains any keyword as a whole word,
    ignoring case.

    """
    def __init__(self, keywords):
        """Initializes a NameContainsKeywords() object."""
        self.keywords = tuple(keywords)

    def __call__(self, person):
        words = str(person.name).lower().split()
        return any(keyword.lower() in words for keyword in self.keywords)

    def __eq__(self, other):
        if not isinstance(other, NameContainsKeywords):
            return NotImplemented
        return self.keywords == other.keywords

    def __hash__(self):
        return hash(self.keywords)


class FindCommand(Command):
    """Filters the list down to persons matching any of the keywords."""

    COMMAND_WORD = "find"
    MESSAGE_USAGE = usage(
        COMMAND_WORD,
        "Finds all persons whose names contain any of the specified "
        "keywords (case-insensitive) and displays them.",
        "KEYWORD [MORE_KEYWORDS]...",
        f"{COMMAND_WORD} alice bob charlie")
    MESSAGE_PERSONS_LISTED = "{} persons listed!"

    def __init__(self, predicate):
        """Initializes a FindCommand() object.

        Args:
            predicate (NameContainsKeywords):   the filter to apply.

        """
        self.predicate = predicate

    def execute(self, address_book):
        address_book.update_filter(self.predicate)
        shown = len(address_book.filtered_persons)
        logger.info("find matched %d person(s)", shown)
        return CommandResult(self.MESSAGE_PERSONS_LISTED.format(shown))

    def __eq__(self, other):
        if not isinstance(other, FindCommand):
            return NotImplemented
        return self.predicate == other.predicate

    def __hash__(self):
        return hash(self.predicate)


class HelpCommand(Command):
    """Shows the usage of every command."""

    COMMAND_WORD = "help"
    MESSAGE_USAGE = usage(
        COMMAND_WORD, "Shows program usage instructions.",
        None, COMMAND_WORD)

    def execute(self, address_book):
        text = "\n\n".join(
            command.MESSAGE_USAGE for command in (
                EditCommand, FindCommand, ListCommand, HelpCommand,
                ExitCommand))
        return CommandResult(text, show_help=True)

    def __eq__(self, other):
        return isinstance(other, HelpCommand)

    def __hash__(self):
        return hash(self.COMMAND_WORD)


class ExitCommand(Command):
    """Ends the session."""

    COMMAND_WORD = "exit"
    MESSAGE_USAGE = usage(
        COMMAND_WORD, "Exits the program.", None, COMMAND_WORD)
    MESSAGE_EXIT = "Exiting Address Book as requested ..."

    def execute(self, address_book):
        return CommandResult(self.MESSAGE_EXIT, exit=True)

    def __eq__(self, other):
        return isinstance(other, ExitCommand)

    def __hash__(self):
        return hash(self.COMMAND_WORD)
