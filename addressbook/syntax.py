"""Command syntax shared by the parsers and the command usage texts."""


class Prefix(str):
    """A field marker in command text, e.g. 'n/'."""

    def __repr__(self):
        return f"Prefix({str.__repr__(self)})"


PREFIX_NAME = Prefix("n/")
PREFIX_PHONE = Prefix("p/")
PREFIX_EMAIL = Prefix("e/")
PREFIX_TAG = Prefix("t/")
