"""Task list exceptions

Nothing in the store or the view deriver raises these for well-typed input;
they surface from storage backends and are handled by the store.
"""


class TaskListError(Exception):
    """Task list base exception"""

    pass


class StorageError(TaskListError):
    """Key-value store read/write failure"""

    pass
