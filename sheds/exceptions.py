"""
Shed registry exceptions.
"""


class ShedNotFound(Exception):
    """Raised when a shed id does not resolve to a shed."""

    def __init__(self, shed_id):
        self.shed_id = shed_id
        super().__init__(f"Shed {shed_id} not found")
