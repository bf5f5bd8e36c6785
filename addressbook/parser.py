"""Turns command text into executable commands."""
import logging
import re

from addressbook.commands import (
    EditCommand,
    EditPersonDescriptor,
    ExitCommand,
    FindCommand,
    HelpCommand,
    ListCommand,
    NameContainsKeywords
)
from addressbook.errors import (
    DuplicatePrefixError,
    InvalidCommandFormatError,
    NoFieldEditedError,
    UnknownCommandError
)
from addressbook.model import Email, Name, Phone, Tag
from addressbook.syntax import (
    PREFIX_EMAIL,
    PREFIX_NAME,
    PREFIX_PHONE,
    PREFIX_TAG
)

logger = logging.getLogger(__name__)

BASIC_COMMAND_FORMAT = re.compile(r"(?P<command>\S+)(?P<arguments>.*)", re.S)


class ArgumentMultimap():
    """The prefixed values found in a command's arguments.

    Attributes:
        preamble (str): the text before the first prefix.
        tokens (list):  (prefix, value) pairs in input order.

    """
    def __init__(self, preamble="", tokens=None):
        """Initializes an ArgumentMultimap() object."""
        self.preamble = preamble
        self.tokens = list(tokens or [])

    def get_all_values(self, prefix):
        """Returns every value given for ``prefix``, in input order."""
        return [value for this_prefix, value in self.tokens
                if this_prefix == prefix]

    def verify_no_duplicate_prefixes(self, limits):
        """Checks that no prefix occurs more often than allowed.

        Args:
            limits (dict):  maximum occurrences per prefix. Checking and
        reporting follow the dict's order.

        Raises:
            DuplicatePrefixError: naming every prefix over its limit.

        """
        duplicates = [
            prefix for prefix, limit in limits.items()
            if len(self.get_all_values(prefix)) > limit]
        if duplicates:
            raise DuplicatePrefixError(duplicates)


def tokenize(args_string, *prefixes):
    """Splits an argument string into a preamble and prefixed values.

    A prefix only counts at the start of the string or after whitespace.
    Each value runs until the next prefix and is stripped.

    Args:
        args_string (str):  the arguments after the command word.
        prefixes (Prefix):  the prefixes to recognise.

    Returns:
        multimap (ArgumentMultimap):    the preamble and values.

    """
    padded = f" {args_string}"
    positions = []
    for prefix in prefixes:
        pattern = re.compile(rf"(?<=\s){re.escape(prefix)}")
        for match in pattern.finditer(padded):
            positions.append((match.start(), prefix))
    positions.sort()

    if positions:
        preamble = padded[:positions[0][0]].strip()
    else:
        preamble = padded.strip()

    tokens = []
    for index, (start, prefix) in enumerate(positions):
        if index + 1 < len(positions):
            end = positions[index + 1][0]
        else:
            end = len(padded)
        tokens.append((prefix, padded[start + len(prefix):end].strip()))
    return ArgumentMultimap(preamble, tokens)


def parse_name(name):
    return Name(name.strip())


def parse_phone(phone):
    return Phone(phone.strip())


def parse_email(email):
    return Email(email.strip())


def parse_tag(tag):
    return Tag(tag.strip())


class EditCommandParser():
    """Parses the arguments of an 'edit' command."""

    def parse(self, args):
        """Parses the arguments into an EditCommand.

        The first n/ value is the current name of the person to edit,
        an optional second n/ value the new name. Values are validated in
        the order they appear and the first invalid one is reported.

        Args:
            args (str): the arguments after the command word.

        Returns:
            command (EditCommand):  the parsed command.

        Raises:
            InvalidCommandFormatError: no current name is given, or text
        precedes the first prefix.
            DuplicatePrefixError: more than two n/, or more than one p/
        or e/.
            ConstraintViolationError: a value is invalid.
            NoFieldEditedError: nothing to edit is given.

        """
        multimap = tokenize(
            args, PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_TAG)

        if multimap.preamble or not multimap.get_all_values(PREFIX_NAME):
            raise InvalidCommandFormatError(EditCommand.MESSAGE_USAGE)

        multimap.verify_no_duplicate_prefixes({
            PREFIX_NAME: 2,
            PREFIX_PHONE: 1,
            PREFIX_EMAIL: 1})

        # a lone empty t/ clears the tags
        tag_count = len(multimap.get_all_values(PREFIX_TAG))

        names = []
        fields = {}
        tags = None
        for prefix, value in multimap.tokens:
            if prefix == PREFIX_NAME:
                names.append(parse_name(value))
            elif prefix == PREFIX_PHONE:
                fields['phone'] = parse_phone(value)
            elif prefix == PREFIX_EMAIL:
                fields['email'] = parse_email(value)
            elif prefix == PREFIX_TAG:
                if tags is None:
                    tags = set()
                if value or tag_count > 1:
                    tags.add(parse_tag(value))

        old_name = names[0]
        if len(names) > 1:
            fields['name'] = names[1]
        descriptor = EditPersonDescriptor(tags=tags, **fields)

        if not descriptor.is_any_field_edited():
            raise NoFieldEditedError()

        return EditCommand(old_name, descriptor)


class FindCommandParser():
    """Parses the arguments of a 'find' command."""

    def parse(self, args):
        keywords = args.split()
        if not keywords:
            raise InvalidCommandFormatError(FindCommand.MESSAGE_USAGE)
        return FindCommand(NameContainsKeywords(keywords))


class AddressBookParser():
    """Splits user input into a command word and its arguments and hands
    them to the matching parser.

    """
    def parse_command(self, user_input):
        """Parses user input into a command for execution.

        Args:
            user_input (str):   the full command text.

        Returns:
            command (Command):  the parsed command.

        Raises:
            InvalidCommandFormatError: the input is blank.
            UnknownCommandError: the command word is not recognised.
            ParseError: the command's own parser rejects the arguments.

        """
        matcher = BASIC_COMMAND_FORMAT.fullmatch(user_input.strip())
        if not matcher:
            raise InvalidCommandFormatError(HelpCommand.MESSAGE_USAGE)

        command_word = matcher.group('command')
        arguments = matcher.group('arguments')
        logger.debug("command word: %s; arguments: %s",
                     command_word, arguments)

        if command_word == EditCommand.COMMAND_WORD:
            return EditCommandParser().parse(arguments)
        elif command_word == FindCommand.COMMAND_WORD:
            return FindCommandParser().parse(arguments)
        elif command_word == ListCommand.COMMAND_WORD:
            return ListCommand()
        elif command_word == HelpCommand.COMMAND_WORD:
            return HelpCommand()
        elif command_word == ExitCommand.COMMAND_WORD:
            return ExitCommand()
        else:
            logger.info("unknown command word: %s", command_word)
            raise UnknownCommandError()
