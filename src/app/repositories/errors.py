class DuplicateEntryError(Exception):
    """A write hit a unique constraint (email, role name, permission name)"""
