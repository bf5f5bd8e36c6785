#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""addressbook
Version:  0.1.0
License:  MIT
About:
A terminal-based address book. Person records are loaded from local
YAML files and edited in memory with prefixed text commands.

usage: addressbook [-h] [-c <file>] for more help: addressbook <command> -h ...

Terminal-based address book.

commands:
  (for more help: addressbook <command> -h)
    config              edit configuration file
    edit                edit a person
    find                find persons by name
    list (ls)           list persons
    shell               interactive shell
    version             show version info

optional arguments:
  -h, --help            show this help message and exit
  -c <file>, --config <file>
                        config file


Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

"""
import argparse
import configparser
import logging
import os
import subprocess
import sys
from cmd import Cmd

import yaml
from rich import box
from rich.color import ColorParseError
from rich.console import Console
from rich.markup import escape
from rich.style import Style
from rich.table import Table
from rich.text import Text

from addressbook.commands import EditCommand, FindCommand, ListCommand
from addressbook.errors import AddressBookError, ConstraintViolationError
from addressbook.logs import setup_logging
from addressbook.model import (
    AddressBook,
    Booking,
    Email,
    Name,
    Person,
    Phone,
    Tag
)
from addressbook.parser import AddressBookParser
from addressbook.sample import sample_persons

APP_NAME = "addressbook"
APP_VERS = "0.1.0"
APP_LICENSE = "Released under MIT license."
DEFAULT_DATA_DIR = f"$HOME/.local/share/{APP_NAME}"
DEFAULT_CONFIG_FILE = f"$HOME/.config/{APP_NAME}/config"
DEFAULT_CONFIG = (
    "[main]\n"
    f"data_dir = {DEFAULT_DATA_DIR}\n"
    "\n"
    "[colors]\n"
    "disable_colors = false\n"
    "disable_bold = false\n"
    "# custom colors\n"
    "#list_title = bright_blue\n"
    "#list_header = red\n"
    "#list_name = bright_white\n"
    "#list_phone = bright_magenta\n"
    "#list_email = bright_blue\n"
    "#list_tags = bright_cyan\n"
    "#list_bookings = bright_yellow\n"
    "\n"
    "[logging]\n"
    "# debug, info, warning, error or critical\n"
    "level = warning\n"
    "# also write log records to this file\n"
    "#file = $HOME/.local/share/addressbook/addressbook.log\n"
)
DEFAULT_COLORS = {
    'list_title': "bright_blue",
    'list_header': "magenta",
    'list_name': "default",
    'list_phone': "blue",
    'list_email': "green",
    'list_tags': "cyan",
    'list_bookings': "yellow",
}
# columns rendered in bold unless bold is disabled
BOLD_COLORS = ['list_title', 'list_header', 'list_name']

logger = logging.getLogger(__name__)


class AddressBookApp():
    """Performs address book operations.

    Attributes:
        config_file (str):  application config file.
        data_dir (str):     directory containing person files.
        dflt_config (str):  the default config if none is present.

    """
    def __init__(
            self,
            config_file,
            data_dir,
            dflt_config):
        """Initializes an AddressBookApp() object."""
        self.config_file = config_file
        self.data_dir = data_dir
        self.config_dir = os.path.dirname(self.config_file)
        self.dflt_config = dflt_config
        self.interactive = False

        # editor (required for some functions)
        self.editor = os.environ.get("EDITOR")

        self.colors = DEFAULT_COLORS.copy()
        self.color_bold = True
        self.styles = {}
        self.log_level = "warning"
        self.log_file = None

        self.parser = AddressBookParser()
        self.address_book = AddressBook()

        self._default_config()
        self._parse_config()
        self._verify_data_dir()
        self._parse_files()

    def _default_config(self):
        """Create a default configuration directory and file if they
        do not already exist.

        """
        if not os.path.exists(self.config_file):
            try:
                if self.config_dir:
                    os.makedirs(self.config_dir, exist_ok=True)
                with open(self.config_file, "w",
                          encoding="utf-8") as config_file:
                    config_file.write(self.dflt_config)
            except OSError:
                self._error_exit(
                    "Config file doesn't exist "
                    "and can't be created")

    @staticmethod
    def _error_exit(errormsg):
        """Print an error message and exit with a status of 1

        Args:
            errormsg (str): the error message to display.

        """
        print(f"ERROR: {errormsg.rstrip('.')}.")
        sys.exit(1)

    @staticmethod
    def _error_pass(errormsg):
        """Print an error message but don't exit.

        Args:
            errormsg (str): the error message to display.

        """
        print(f"ERROR: {errormsg.rstrip('.')}.")

    def _handle_error(self, msg):
        """Reports an error message and conditionally handles error exit
        or notification.

        Args:
            msg (str):  the error message.

        """
        if self.interactive:
            self._error_pass(msg)
        else:
            self._error_exit(msg)

    def _apply_colors(self):
        """Build styles from the configured colors. An invalid color
        name leaves that column unstyled.

        """
        self.styles = {}
        for key, color in self.colors.items():
            try:
                self.styles[key] = Style(
                    color=color,
                    bold=self.color_bold and key in BOLD_COLORS)
            except ColorParseError:
                self.styles[key] = None

    def _parse_config(self):
        """Read and parse the configuration file."""
        config = configparser.ConfigParser()
        if os.path.isfile(self.config_file):
            try:
                config.read(self.config_file)
            except configparser.Error:
                self._error_exit("Error reading config file")

            if "main" in config:
                if config["main"].get("data_dir"):
                    self.data_dir = os.path.expandvars(
                        os.path.expanduser(
                            config["main"].get("data_dir")))

            if "colors" in config:
                # custom colors
                for key, default in DEFAULT_COLORS.items():
                    self.colors[key] = config["colors"].get(key, default)

                # disable colors
                try:
                    disable_colors = config["colors"].getboolean(
                        "disable_colors", False)
                    disable_bold = config["colors"].getboolean(
                        "disable_bold", False)
                except ValueError:
                    self._error_exit("Invalid boolean in [colors]")
                if disable_colors:
                    for key in self.colors:
                        self.colors[key] = "default"

                # disable bold
                if disable_bold:
                    self.color_bold = False

            if "logging" in config:
                self.log_level = config["logging"].get(
                    "level", self.log_level)
                log_file = config["logging"].get("file")
                if log_file:
                    self.log_file = os.path.expandvars(
                        os.path.expanduser(log_file))

            # try to apply requested custom colors
            self._apply_colors()

            try:
                setup_logging(self.log_level, self.log_file)
            except ValueError as err:
                self._error_exit(str(err))
            except OSError:
                self._error_exit(f"Can't open log file {self.log_file}")
        else:
            self._error_exit("Config file not found")

    @staticmethod
    def _person_from_data(data):
        """Build a Person from the 'person' mapping of a data file.

        Args:
            data (dict):    the parsed person data.

        Returns:
            person (Person):    the person.

        Raises:
            AddressBookError: if a field value is invalid.

        """
        tags = data.get('tags') or []
        if isinstance(tags, str):
            tags = tags.split(',')
        elif not isinstance(tags, list):
            raise ConstraintViolationError(
                "tags", "tags should be a list or a comma-separated string")
        entries = data.get('bookings') or []
        if not isinstance(entries, list):
            raise ConstraintViolationError(
                "bookings", "bookings should be a list")
        bookings = []
        for entry in entries:
            booking = None
            if isinstance(entry, dict):
                booking = Booking.from_dict(entry)
            if not booking:
                logger.warning(
                    "skipping invalid booking for %s", data.get('name'))
            else:
                bookings.append(booking)
        return Person(
            Name(str(data.get('name') or '')),
            Phone(str(data.get('phone') or '')),
            Email(str(data.get('email') or '')),
            frozenset(Tag(str(tag).strip()) for tag in tags),
            tuple(bookings))

    def _parse_files(self):
        """Read person files from `data_dir` into the address book. If
        no persons are found, the sample persons are used instead.

        """
        persons = []
        person_files = {}

        with os.scandir(self.data_dir) as entries:
            for entry in sorted(entries, key=lambda x: x.name):
                if entry.name.endswith('.yml') and entry.is_file():
                    fullpath = entry.path
                    data = None
                    try:
                        with open(fullpath, "r",
                                  encoding="utf-8") as entry_file:
                            data = yaml.safe_load(entry_file)
                    except (OSError, yaml.YAMLError):
                        self._error_pass(
                            f"failure reading or parsing {fullpath} "
                            "- SKIPPING")
                    person = None
                    if isinstance(data, dict) and isinstance(
                            data.get('person'), dict):
                        try:
                            person = self._person_from_data(data['person'])
                        except AddressBookError as err:
                            self._error_pass(
                                f"{fullpath}: {err} - SKIPPING")
                    elif data is not None:
                        self._error_pass(
                            f"no person data in {fullpath} - SKIPPING")
                    if person:
                        # duplicate name detection
                        dupfile = person_files.get(person.name)
                        if dupfile:
                            self._error_pass(
                                "duplicate name detected:\n"
                                f"  {person.name}\n"
                                f"  {dupfile}\n"
                                f"  {fullpath}\n"
                                f"SKIPPING {fullpath}")
                        else:
                            persons.append(person)
                            person_files[person.name] = fullpath

        if not persons:
            logger.info("no person files in %s, using sample data",
                        self.data_dir)
            persons = sample_persons()
        self.address_book = AddressBook(persons)
        logger.info("loaded %d person(s)", len(persons))

    def _verify_data_dir(self):
        """Create the data directory if it doesn't exist."""
        if not os.path.exists(self.data_dir):
            try:
                os.makedirs(self.data_dir)
            except OSError:
                self._error_exit(
                    f"{self.data_dir} doesn't exist "
                    "and can't be created"
                )
        elif not os.path.isdir(self.data_dir):
            self._error_exit(f"{self.data_dir} is not a directory")
        elif not os.access(self.data_dir, os.R_OK | os.X_OK):
            self._error_exit(
                "You don't have read/execute permissions to "
                f"{self.data_dir}")

    def edit_config(self):
        """Edit the config file (using $EDITOR) and then reload config."""
        if self.editor:
            try:
                subprocess.run(
                    [self.editor, self.config_file], check=True)
            except (OSError, subprocess.SubprocessError):
                self._handle_error("failure editing config file")
            else:
                if self.interactive:
                    self._parse_config()
        else:
            self._handle_error("$EDITOR is required and not set")

    def run(self, command_text):
        """Parse and execute a command, printing its feedback.

        Args:
            command_text (str): the command as typed by the user.

        Returns:
            result (CommandResult or None): the result, or None if the
        command failed.

        """
        try:
            command = self.parser.parse_command(command_text)
            result = command.execute(self.address_book)
        except AddressBookError as err:
            logger.debug("command failed: %s", type(err).__name__)
            self._handle_error(str(err))
            return None
        print(result.feedback)
        if isinstance(command, (EditCommand, FindCommand, ListCommand)):
            self.show_persons()
        return result

    def show_persons(self):
        """Print the persons matching the active filter as a table."""
        persons = self.address_book.filtered_persons

        console = Console()
        list_table = Table(
            show_header=True,
            show_lines=True,
            header_style=self.styles.get('list_header'),
            box=box.SIMPLE,
            title=f"Persons ({len(persons)})",
            title_justify="left",
            title_style=self.styles.get('list_title'))
        list_table.add_column(
            "Name",
            style=self.styles.get('list_name'),
            no_wrap=True,
            overflow=None)
        list_table.add_column(
            "Phone",
            style=self.styles.get('list_phone'),
            no_wrap=True,
            overflow=None)
        list_table.add_column(
            "Email",
            style=self.styles.get('list_email'),
            no_wrap=False,
            overflow="fold")
        list_table.add_column(
            "Tags",
            style=self.styles.get('list_tags'),
            no_wrap=False,
            overflow="fold")
        list_table.add_column(
            "Bookings",
            style=self.styles.get('list_bookings'),
            no_wrap=False,
            overflow="fold")
        for person in persons:
            tags = ','.join(tag.value for tag in person.sorted_tags())
            bookings = '\n'.join(
                escape(str(booking)) for booking in person.bookings)
            list_table.add_row(
                escape(str(person.name)),
                str(person.phone),
                escape(str(person.email)),
                tags,
                bookings)
        if not persons:
            list_table.show_header = False
            nonetxt = Text("None")
            nonetxt.stylize("not bold default")
            list_table.add_row(nonetxt)
        layout = Table.grid()
        layout.add_column("single")
        layout.add_row("")
        layout.add_row(list_table)
        console.print(layout)


class AddressBookShell(Cmd):
    """Provides methods for interactive shell use.

    Attributes:
        app (obj):      an instance of AddressBookApp().

    """
    def __init__(
            self,
            app,
            completekey='tab',
            stdin=None,
            stdout=None):
        """Initializes an AddressBookShell() object."""
        super().__init__(completekey, stdin, stdout)
        self.app = app
        self.app.interactive = True

        self.doc_header = (
            "Commands (for more info type: help <command>):"
        )
        self.ruler = "―"

        self._set_prompt()

        self.nohelp = (
            "\nNo help for %s\n"
        )
        self.intro = (
            f"{APP_NAME} {APP_VERS}\n\n"
            f"Enter command (or 'help')\n"
        )

    # class method overrides
    def default(self, args):
        """Handle command aliases and unknown commands.

        Args:
            args (str): the command arguments.

        Returns:
            stop (bool):    True if the shell should exit.

        """
        if args in ["quit", "EOF"]:
            return self.do_exit("")
        elif args.startswith("ls"):
            newargs = args.split(' ')
            return self.do_list(' '.join(newargs[1:]))
        else:
            print("\nNo such command. See 'help'.\n")
        return False

    def emptyline(self):
        """Ignore empty line entry."""

    def _set_prompt(self):
        """Set the prompt string."""
        if self.app.color_bold:
            self.prompt = f"\033[1m{APP_NAME}\033[0m> "
        else:
            self.prompt = f"{APP_NAME}> "

    @staticmethod
    def do_clear(args):
        """Clear the terminal.

        Args:
            args (str): the command arguments, ignored.

        """
        os.system("cls" if os.name == "nt" else "clear")

    def do_config(self, args):
        """Edit the config file and reload the configuration.

        Args:
            args (str): the command arguments, ignored.

        """
        self.app.edit_config()
        self._set_prompt()

    def do_edit(self, args):
        """Edit a person.

        Args:
            args (str):     the command arguments.

        """
        if len(args) > 0:
            self.app.run(f"edit {args}")
        else:
            self.help_edit()

    def do_exit(self, args):
        """Exit the shell.

        Args:
            args (str): the command arguments, ignored.

        Returns:
            stop (bool):    True, ending the command loop.

        """
        result = self.app.run("exit")
        return bool(result and result.exit)

    def do_find(self, args):
        """Find persons by name.

        Args:
            args (str):     the command arguments.

        """
        if len(args) > 0:
            self.app.run(f"find {args}")
        else:
            self.help_find()

    def do_help(self, args):
        """Show command usage, or the help for a single command.

        Args:
            args (str):     the command arguments.

        """
        if args:
            super().do_help(args)
        else:
            self.app.run("help")

    def do_list(self, args):
        """List all persons.

        Args:
            args (str): the command arguments, ignored.

        """
        self.app.run("list")

    @staticmethod
    def help_clear():
        """Output help for 'clear' command."""
        print(
            '\nclear:\n'
            '    Clear the terminal window.\n'
        )

    @staticmethod
    def help_config():
        """Output help for 'config' command."""
        print(
            '\nconfig:\n'
            '    Edit the config file with $EDITOR and then reload '
            'the configuration.\n'
        )

    @staticmethod
    def help_edit():
        """Output help for 'edit' command."""
        print(
            '\nedit n/<name> [n/<new name>] [p/<phone>] [e/<email>] '
            '[t/<tag>]...:\n'
            '    Edit the person with the given name. Given fields '
            'replace the current values. Repeat t/ for several tags, '
            'or use an empty t/ to clear all tags.\n'
        )

    @staticmethod
    def help_exit():
        """Output help for 'exit' command."""
        print(
            '\nexit (quit):\n'
            '    Exit the shell.\n'
        )

    @staticmethod
    def help_find():
        """Output help for 'find' command."""
        print(
            '\nfind <keyword> [keyword]...:\n'
            '    Show persons whose name contains any of the keywords '
            '(case-insensitive, whole words).\n'
        )

    @staticmethod
    def help_help():
        """Output help for 'help' command."""
        print(
            '\nhelp [command]:\n'
            '    Show usage for all commands, or the help for a '
            'single command.\n'
        )

    @staticmethod
    def help_list():
        """Output help for 'list' command."""
        print(
            '\nlist (ls):\n'
            '    List all persons and clear any active find.\n'
        )


def parse_args(argv=None):
    """Parse command line arguments.

    Args:
        argv (list):    the arguments to parse (default: sys.argv).

    Returns:
        parser (obj):   the argument parser.
        args (obj):     the command line arguments provided.

    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description='Terminal-based address book.')
    parser._positionals.title = 'commands'
    parser.set_defaults(command=None)
    subparsers = parser.add_subparsers(
        metavar=f'(for more help: {APP_NAME} <command> -h)')
    config = subparsers.add_parser(
        'config',
        help='edit configuration file')
    config.set_defaults(command='config')
    edit = subparsers.add_parser(
        'edit',
        help='edit a person')
    edit.add_argument(
        'fields',
        nargs=argparse.REMAINDER,
        metavar='<field>',
        help='n/<name> [n/<new name>] [p/<phone>] [e/<email>] [t/<tag>]...')
    edit.set_defaults(command='edit')
    find = subparsers.add_parser(
        'find',
        help='find persons by name')
    find.add_argument(
        'keywords',
        nargs='*',
        metavar='<keyword>',
        help='name keyword(s)')
    find.set_defaults(command='find')
    listcmd = subparsers.add_parser(
        'list',
        aliases=['ls'],
        help='list persons')
    listcmd.set_defaults(command='list')
    shell = subparsers.add_parser(
        'shell',
        help='interactive shell')
    shell.set_defaults(command='shell')
    version = subparsers.add_parser(
        'version',
        help='show version info')
    version.set_defaults(command='version')
    parser.add_argument(
        '-c',
        '--config',
        dest='config',
        metavar='<file>',
        help='config file')
    args = parser.parse_args(argv)
    return parser, args


def main(argv=None):
    """Entry point. Parses arguments, creates AddressBookApp() object,
    calls requested method and parameters.

    """
    if os.environ.get("XDG_CONFIG_HOME"):
        config_file = os.path.join(
            os.path.expandvars(os.path.expanduser(
                os.environ["XDG_CONFIG_HOME"])), APP_NAME, "config")
    else:
        config_file = os.path.expandvars(
            os.path.expanduser(DEFAULT_CONFIG_FILE))

    if os.environ.get("XDG_DATA_HOME"):
        data_dir = os.path.join(
            os.path.expandvars(os.path.expanduser(
                os.environ["XDG_DATA_HOME"])), APP_NAME)
    else:
        data_dir = os.path.expandvars(
            os.path.expanduser(DEFAULT_DATA_DIR))

    parser, args = parse_args(argv)

    if args.config:
        config_file = os.path.expandvars(
            os.path.expanduser(args.config))

    if not args.command:
        parser.print_help(sys.stderr)
        sys.exit(1)
    elif args.command == "version":
        print(f"{APP_NAME} {APP_VERS}")
        print(APP_LICENSE)
        return

    app = AddressBookApp(
        config_file,
        data_dir,
        DEFAULT_CONFIG)

    if args.command == "config":
        app.edit_config()
    elif args.command == "edit":
        app.run(' '.join(['edit'] + args.fields))
    elif args.command == "find":
        app.run(' '.join(['find'] + args.keywords))
    elif args.command == "list":
        app.run("list")
    elif args.command == "shell":
        shell = AddressBookShell(app)
        shell.cmdloop()
    else:
        sys.exit(1)


# entry point
if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)
