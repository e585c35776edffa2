"""
Daily entry exceptions.

Every rejection carries a field-tagged `errors` dict so the client can
highlight the offending inputs.
"""


class DailyEntryError(Exception):
    """Base class for daily entry failures."""

    def __init__(self, message, errors=None):
        self.errors = errors or {}
        super().__init__(message)


class EntryValidationError(DailyEntryError):
    """Raised when entry values break a range rule or the conservation rule."""

    def __init__(self, errors):
        fields = ', '.join(sorted(errors))
        super().__init__(f"Daily entry failed validation: {fields}", errors=errors)


class DuplicateEntryError(DailyEntryError):
    """Raised when a shed already has an entry for the date."""

    def __init__(self, shed_id, entry_date):
        self.shed_id = shed_id
        self.entry_date = entry_date
        super().__init__(
            f"An entry for shed {shed_id} on {entry_date} already exists",
            errors={'entry_date': ['An entry for this shed and date already exists']},
        )


class EntryNotFound(DailyEntryError):
    """Raised when an entry id does not resolve to a stored entry."""

    def __init__(self, entry_id):
        self.entry_id = entry_id
        super().__init__(f"Daily entry {entry_id} not found")
