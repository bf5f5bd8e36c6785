"""Exceptions raised while parsing and executing address book commands.

Every exception's string form is the message shown to the user.

"""


class AddressBookError(Exception):
    """Base exception for all address book errors.

    Attributes:
        message (str):  the user-facing message.

    """
    def __init__(self, message):
        """Initializes an AddressBookError() object."""
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ParseError(AddressBookError):
    """User input does not follow the expected format."""


class InvalidCommandFormatError(ParseError):
    """A mandatory part of the command is missing or malformed."""

    def __init__(self, usage):
        """Initializes an InvalidCommandFormatError() object.

        Args:
            usage (str):    the usage text of the offending command.

        """
        super().__init__(f"Invalid command format! \n{usage}")
        self.usage = usage


class UnknownCommandError(ParseError):
    """The command word is not recognised."""

    def __init__(self):
        """Initializes an UnknownCommandError() object."""
        super().__init__("Unknown command")


class NoFieldEditedError(ParseError):
    """An edit names a person but no field to change."""

    def __init__(self):
        """Initializes a NoFieldEditedError() object."""
        super().__init__("At least one field to edit must be provided.")


class ConstraintViolationError(ParseError):
    """A field value does not satisfy the field's format rule.

    Attributes:
        field (str):    the name of the field that failed.

    """
    def __init__(self, field, message):
        """Initializes a ConstraintViolationError() object."""
        super().__init__(message)
        self.field = field


class DuplicatePrefixError(ParseError):
    """One or more single-valued prefixes were given more than once.

    Attributes:
        prefixes (tuple):   the repeated prefixes, in checking order.

    """
    def __init__(self, prefixes):
        """Initializes a DuplicatePrefixError() object."""
        self.prefixes = tuple(prefixes)
        super().__init__(
            "Multiple values specified for the following single-valued "
            f"field(s): {' '.join(str(p) for p in self.prefixes)}")


class CommandError(AddressBookError):
    """A parsed command cannot be applied to the address book."""


class PersonNotFoundError(CommandError):
    """No person in the shown list has the requested name."""

    def __init__(self, name):
        """Initializes a PersonNotFoundError() object.

        Args:
            name (str): the name that was searched for.

        """
        super().__init__(
            f"Person with name '{name}' not found in the address book.")
        self.name = name


class DuplicatePersonError(CommandError):
    """The result of an operation would duplicate an existing person."""

    def __init__(self):
        """Initializes a DuplicatePersonError() object."""
        super().__init__("This person already exists in the address book.")
