"""
Inherited field layout of a managed class
"""

from .errors import ModelError
from .models import Field, ManagedClass


def get_all_fields(subclass: ManagedClass) -> list[Field]:
    """Fields of a class including its superclasses' fields

    Ordered root class first, most derived class last; each class keeps its
    own declaration order.
    """
    stack = []
    seen = set()
    cls = subclass
    while cls is not None:
        if id(cls) in seen:
            raise ModelError(f"Cyclic class hierarchy at {cls.qualified_name}")
        seen.add(id(cls))
        stack.append(cls)
        cls = cls.parent

    fields = []
    while stack:
        fields.extend(stack.pop().fields)
    return fields
