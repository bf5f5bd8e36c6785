"""Tests for command execution."""
import logging

import pytest

from addressbook.commands import (
    CommandResult,
    EditCommand,
    EditPersonDescriptor,
    ExitCommand,
    FindCommand,
    HelpCommand,
    ListCommand,
    NameContainsKeywords,
    format_person
)
from addressbook.errors import DuplicatePersonError, PersonNotFoundError
from addressbook.model import Name, Tag
from conftest import (
    VALID_EMAIL_BOB,
    VALID_NAME_AMY,
    VALID_NAME_BOB,
    VALID_PHONE_BOB,
    VALID_TAG_HUSBAND,
    make_descriptor,
    make_person
)


def find_first(address_book):
    """Narrows the shown list to the first person only."""
    first_name = str(address_book.persons[0].name).split()[0]
    address_book.update_filter(NameContainsKeywords([first_name]))


class TestEditPersonDescriptor:
    """Test the descriptor value object."""

    def test_no_field_edited(self):
        assert not EditPersonDescriptor().is_any_field_edited()

    @pytest.mark.parametrize("fields", [
        {"name": VALID_NAME_BOB},
        {"phone": VALID_PHONE_BOB},
        {"email": VALID_EMAIL_BOB},
        {"tags": [VALID_TAG_HUSBAND]},
        {"tags": []},
    ])
    def test_any_field_edited(self, fields):
        assert make_descriptor(**fields).is_any_field_edited()

    def test_tags_become_frozenset(self):
        descriptor = EditPersonDescriptor(tags=[Tag("a"), Tag("a")])

        assert descriptor.tags == frozenset([Tag("a")])

    def test_equality(self):
        descriptor = make_descriptor(name=VALID_NAME_AMY, tags=["friend"])

        assert descriptor == make_descriptor(
            name=VALID_NAME_AMY, tags=["friend"])
        assert descriptor != make_descriptor(name=VALID_NAME_BOB)
        assert descriptor != make_descriptor(name=VALID_NAME_AMY)
        assert make_descriptor(tags=[]) != EditPersonDescriptor()

    def test_apply_keeps_unset_fields(self, typical_persons):
        alice = typical_persons[0]

        edited = make_descriptor(phone=VALID_PHONE_BOB).apply_to(alice)

        assert str(edited.phone) == VALID_PHONE_BOB
        assert edited.name == alice.name
        assert edited.email == alice.email
        assert edited.tags == alice.tags
        assert edited.bookings == alice.bookings


class TestEditCommand:
    """Test executing 'edit'."""

    def test_all_fields_specified(self, address_book, booking):
        alice = address_book.persons[0]
        descriptor = make_descriptor(
            name=VALID_NAME_BOB, phone=VALID_PHONE_BOB,
            email=VALID_EMAIL_BOB, tags=[VALID_TAG_HUSBAND])

        result = EditCommand(alice.name, descriptor).execute(address_book)

        expected = make_person(
            VALID_NAME_BOB, VALID_PHONE_BOB, VALID_EMAIL_BOB,
            [VALID_TAG_HUSBAND], [booking])
        assert address_book.persons[0] == expected
        assert result == CommandResult(
            f"Edited Person: {format_person(expected)}")
        assert result.feedback == (
            "Edited Person: Bob Choo; Phone: 22222222; "
            "Email: bob@example.com; Tags: [husband]")

    def test_some_fields_specified(self, address_book):
        last = address_book.persons[-1]
        descriptor = make_descriptor(
            name=VALID_NAME_BOB, phone=VALID_PHONE_BOB,
            tags=[VALID_TAG_HUSBAND])

        EditCommand(last.name, descriptor).execute(address_book)

        edited = address_book.persons[-1]
        assert str(edited.name) == VALID_NAME_BOB
        assert str(edited.phone) == VALID_PHONE_BOB
        assert edited.email == last.email
        assert edited.tags == frozenset([Tag(VALID_TAG_HUSBAND)])

    def test_bookings_carried_over(self, address_book, booking):
        alice = address_book.persons[0]

        EditCommand(alice.name, make_descriptor(tags=[])).execute(
            address_book)

        edited = address_book.persons[0]
        assert edited.bookings == (booking,)
        assert edited.tags == frozenset()

    def test_same_name_is_not_duplicate(self, address_book):
        alice = address_book.persons[0]
        descriptor = make_descriptor(
            name=str(alice.name), phone=VALID_PHONE_BOB)

        EditCommand(alice.name, descriptor).execute(address_book)

        assert str(address_book.persons[0].phone) == VALID_PHONE_BOB

    def test_filtered_list(self, address_book):
        find_first(address_book)
        alice = address_book.persons[0]

        result = EditCommand(
            alice.name, make_descriptor(name=VALID_NAME_BOB)).execute(
                address_book)

        assert result.feedback.startswith("Edited Person: Bob Choo;")
        # the filter is reset to show everyone
        assert address_book.filtered_persons == address_book.persons
        assert len(address_book.filtered_persons) == 7

    def test_duplicate_person(self, address_book):
        alice, benson = address_book.persons[:2]
        before = list(address_book.persons)

        with pytest.raises(DuplicatePersonError) as excinfo:
            EditCommand(
                benson.name,
                make_descriptor(name=str(alice.name))).execute(address_book)

        assert str(excinfo.value) == (
            "This person already exists in the address book.")
        assert address_book.persons == before

    def test_duplicate_person_filtered_list(self, address_book):
        # the duplicate may be hidden by the filter
        find_first(address_book)
        alice = address_book.persons[0]
        benson = address_book.persons[1]

        with pytest.raises(DuplicatePersonError):
            EditCommand(
                alice.name,
                make_descriptor(name=str(benson.name))).execute(address_book)

    def test_person_not_found(self, address_book):
        with pytest.raises(PersonNotFoundError) as excinfo:
            EditCommand(
                Name("Nobody Here"),
                make_descriptor(phone=VALID_PHONE_BOB)).execute(address_book)

        assert str(excinfo.value) == (
            "Person with name 'Nobody Here' not found in the address book.")

    def test_failures_logged_below_warning(self, address_book, caplog):
        # the front end reports these to the user itself
        caplog.set_level(logging.INFO, logger="addressbook")
        alice, benson = address_book.persons[:2]

        with pytest.raises(PersonNotFoundError):
            EditCommand(
                Name("Nobody Here"),
                make_descriptor(phone=VALID_PHONE_BOB)).execute(address_book)
        with pytest.raises(DuplicatePersonError):
            EditCommand(
                benson.name,
                make_descriptor(name=str(alice.name))).execute(address_book)

        messages = [(record.levelno, record.getMessage())
                    for record in caplog.records]
        assert (logging.INFO,
                "invalid name provided, person not found: Nobody Here"
                ) in messages
        assert (logging.INFO,
                "attempted to edit person Benson Meier to duplicate: "
                "Alice Pauline") in messages
        assert all(level < logging.WARNING for level, _ in messages)

    def test_person_hidden_by_filter(self, address_book):
        find_first(address_book)
        benson = address_book.persons[1]

        with pytest.raises(PersonNotFoundError):
            EditCommand(
                benson.name,
                make_descriptor(phone=VALID_PHONE_BOB)).execute(address_book)

    def test_equality(self):
        descriptor = make_descriptor(name=VALID_NAME_AMY)
        command = EditCommand(Name(VALID_NAME_BOB), descriptor)

        assert command == EditCommand(
            Name(VALID_NAME_BOB), make_descriptor(name=VALID_NAME_AMY))
        assert command != EditCommand(Name(VALID_NAME_AMY), descriptor)
        assert command != EditCommand(
            Name(VALID_NAME_BOB), make_descriptor(name=VALID_NAME_BOB))
        assert command != ListCommand()
        assert command is not None


class TestOtherCommands:
    """Test 'list', 'find', 'help' and 'exit'."""

    def test_list_resets_filter(self, address_book):
        find_first(address_book)

        result = ListCommand().execute(address_book)

        assert result.feedback == "Listed all persons"
        assert len(address_book.filtered_persons) == 7

    def test_find_multiple_keywords(self, address_book):
        predicate = NameContainsKeywords(["Kurz", "Elle", "Kunz"])

        result = FindCommand(predicate).execute(address_book)

        assert result.feedback == "3 persons listed!"
        assert [str(p.name) for p in address_book.filtered_persons] == [
            "Carl Kurz", "Elle Meyer", "Fiona Kunz"]

    def test_find_whole_words_ignoring_case(self, address_book):
        FindCommand(NameContainsKeywords(["meier"])).execute(address_book)
        assert len(address_book.filtered_persons) == 2

        result = FindCommand(NameContainsKeywords(["Mei"])).execute(
            address_book)
        assert result.feedback == "0 persons listed!"

    def test_help(self, address_book):
        result = HelpCommand().execute(address_book)

        assert result.show_help
        assert not result.exit
        assert EditCommand.MESSAGE_USAGE in result.feedback

    def test_exit(self, address_book):
        result = ExitCommand().execute(address_book)

        assert result == CommandResult(
            "Exiting Address Book as requested ...", exit=True)
