from collections import OrderedDict
from functools import partial


class Register:
    """
    A class for registering classes or functions by name.

    Args:
        name: The name of the register.

    Attributes:
        name: The name of the register.
        source: An ordered dictionary that holds the registered objects.

    Examples:
        SCHEDULES = Register('schedules')

        @SCHEDULES.regist()
        class ExponentialSchedule(Schedule):
            ...

        SCHEDULES['ExponentialSchedule']  # -> ExponentialSchedule
    """

    def __init__(self, name: str):
        self.name = name
        self.source = OrderedDict()

    def __str__(self) -> str:
        inner = str([(k, v) for k, v in self.source.items()])
        return f"Register({self.name}{inner})"

    def __repr__(self) -> str:
        return self.__str__()

    def __getitem__(self, item: str):
        """
        Get a registered object by name.

        Args:
            item: The name of the object.

        Returns:
            The object registered with the given name, or None if the name is not in the register.
        """
        return self.source.get(item, None)

    def __contains__(self, item: str) -> bool:
        return item in self.source

    def __iter__(self):
        return iter(self.source)

    def __len__(self):
        return len(self.source)

    def names(self):
        """Registered names, in registration order."""
        return list(self.source.keys())

    def values(self):
        """Registered objects, in registration order."""
        return list(self.source.values())

    def __call__(self, wrapped: callable, name: str = None) -> callable:
        """
        Add an object to the register.

        Args:
            wrapped: The object to be added to the register.
            name: The name of the object in the register. If not provided, the object's `__name__` will be used.

        Returns:
            The original object, unchanged.
        """
        if name is None:
            name = wrapped.__name__
        assert name is not None
        self.source[name] = wrapped
        return wrapped

    def regist(self, name: str = None):
        """
        Returns a partial function of __call__ with the register's name, to be used as a decorator.

        Args:
            name: The name of the object in the register. If not provided, the object's name will be used.
        """
        return partial(self, name=name)
