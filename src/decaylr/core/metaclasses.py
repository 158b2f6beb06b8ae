from abc import ABCMeta

__all__ = ['OptionMerge']


class OptionMerge(ABCMeta):
    """
    Metaclass that merges the `_options` table of a class with the tables of its bases, so the subclass
    overriding behavior becomes a union of the declared options.

    Only `_options` is merged; entries declared on the subclass win over entries with the same key on a base.
    ::
        class A(metaclass=OptionMerge):
            _options = {'initial_value': ...}

        class B(A):
            _options = {'gamma': ...}

        print(list(B._options))

    result:
    >>> ['initial_value', 'gamma']
    """

    def __new__(cls, name, bases, attrs: dict, **kwds):
        merged = {}
        for base in reversed(bases):
            merged.update(getattr(base, '_options', {}))
        merged.update(attrs.get('_options', {}))
        attrs = dict(attrs)
        attrs['_options'] = merged
        return super().__new__(cls, name, bases, attrs, **kwds)
