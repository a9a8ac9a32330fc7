"""Tests for ProxyFactory — stand-in generation and member interception."""

from __future__ import annotations

import enum
import functools
from abc import ABC, abstractmethod
from typing import NamedTuple, Protocol, final

import pytest

from fluentlambda.capture.proxy import ProxyFactory, is_stand_in
from fluentlambda.kernel.exceptions import TypeNotExtensibleError

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class Recorder:
    """Intercept handler that records every call and returns a fixed value."""

    def __init__(self, result: object = "intercepted") -> None:
        self.calls: list[tuple] = []
        self.result = result

    def __call__(self, receiver, member, args, kwargs):
        self.calls.append((receiver, member.name, args, kwargs))
        return self.result


class Audited:
    """Decorator object that binds like a function."""

    def __init__(self, func) -> None:
        self.__wrapped__ = func

    def __call__(self, instance):
        return self.__wrapped__(instance)

    def __get__(self, instance, owner=None):
        return self if instance is None else functools.partial(self, instance)


class Account:
    created = 0

    def __init__(self, owner: str) -> None:
        Account.created += 1
        self.owner = owner

    def get_owner(self) -> str:
        return self.owner

    def deposit(self, amount: int) -> None:
        raise AssertionError("real method must not run")

    @property
    def balance(self) -> int:
        raise AssertionError("real property must not run")

    @functools.cached_property
    def summary(self) -> str:
        raise AssertionError("real cached property must not run")

    @functools.cache
    def tier(self) -> str:
        raise AssertionError("real cached method must not run")

    @functools.lru_cache(maxsize=4)
    def is_frozen(self) -> bool:
        raise AssertionError("real lru-cached method must not run")

    @Audited
    def audit_trail(self) -> str:
        raise AssertionError("real audited method must not run")

    @staticmethod
    def bank() -> str:
        return "first-national"

    @classmethod
    def kind(cls) -> str:
        return cls.__name__


class Shape(ABC):
    @abstractmethod
    def area(self) -> float: ...

    @abstractmethod
    def _secret(self) -> int: ...


class Named(Protocol):
    def name(self) -> str: ...


@final
class Sealed:
    def value(self) -> int:
        return 1


class Color(enum.Enum):
    RED = 1


class Point(NamedTuple):
    x: int
    y: int

    def manhattan(self) -> int:
        return abs(self.x) + abs(self.y)


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


class TestCreateInterceptingInstance:
    def test_stand_in_is_instance_of_target(self):
        stand_in = ProxyFactory().create_intercepting_instance(Account, Recorder())
        assert isinstance(stand_in, Account)

    def test_constructor_is_not_run(self):
        before = Account.created
        ProxyFactory().create_intercepting_instance(Account, Recorder())
        assert Account.created == before

    def test_abstract_class(self):
        stand_in = ProxyFactory().create_intercepting_instance(Shape, Recorder(2.5))
        assert isinstance(stand_in, Shape)
        assert stand_in.area() == 2.5

    def test_protocol_class(self):
        stand_in = ProxyFactory().create_intercepting_instance(Named, Recorder("n"))
        assert stand_in.name() == "n"

    def test_builtin_subclassable_type(self):
        handler = Recorder("UPPER")
        stand_in = ProxyFactory().create_intercepting_instance(str, handler)
        assert stand_in.upper() == "UPPER"
        assert handler.calls[0][1] == "upper"

    def test_is_stand_in(self):
        stand_in = ProxyFactory().create_intercepting_instance(Account, Recorder())
        assert is_stand_in(stand_in)
        assert not is_stand_in(Account("real"))

    def test_repr_names_target(self):
        stand_in = ProxyFactory().create_intercepting_instance(Account, Recorder())
        assert repr(stand_in) == f"<stand-in for {__name__}.Account>"


class TestNotExtensible:
    def test_final_class_rejected(self):
        with pytest.raises(TypeNotExtensibleError) as info:
            ProxyFactory().create_intercepting_instance(Sealed, Recorder())
        assert info.value.code == "FINAL_TYPE"

    def test_bool_rejected(self):
        with pytest.raises(TypeNotExtensibleError) as info:
            ProxyFactory().create_intercepting_instance(bool, Recorder())
        assert info.value.code == "NOT_SUBCLASSABLE"

    def test_enum_with_members_rejected(self):
        with pytest.raises(TypeNotExtensibleError):
            ProxyFactory().create_intercepting_instance(Color, Recorder())

    def test_non_class_rejected(self):
        with pytest.raises(TypeNotExtensibleError) as info:
            ProxyFactory().create_intercepting_instance(Account("x"), Recorder())  # type: ignore[arg-type]
        assert info.value.code == "NOT_A_CLASS"


# ---------------------------------------------------------------------------
# Interception
# ---------------------------------------------------------------------------


class TestInterception:
    def test_method_call_routes_to_handler(self):
        handler = Recorder()
        stand_in = ProxyFactory().create_intercepting_instance(Account, handler)
        assert stand_in.get_owner() == "intercepted"
        receiver, name, args, kwargs = handler.calls[0]
        assert receiver is stand_in
        assert name == "get_owner"
        assert args == ()
        assert kwargs == {}

    def test_arguments_are_forwarded(self):
        handler = Recorder()
        stand_in = ProxyFactory().create_intercepting_instance(Account, handler)
        stand_in.deposit(10, note="x")
        assert handler.calls[0][2:] == ((10,), {"note": "x"})

    def test_property_routes_to_handler(self):
        handler = Recorder(7)
        stand_in = ProxyFactory().create_intercepting_instance(Account, handler)
        assert stand_in.balance == 7
        assert handler.calls[0][1] == "balance"

    def test_cached_property_routes_to_handler(self):
        handler = Recorder("s")
        stand_in = ProxyFactory().create_intercepting_instance(Account, handler)
        assert stand_in.summary == "s"

    def test_properties_not_intercepted_when_disabled(self):
        handler = Recorder()
        stand_in = ProxyFactory(intercept_properties=False).create_intercepting_instance(Account, handler)
        with pytest.raises(AssertionError, match="real property"):
            _ = stand_in.balance
        assert handler.calls == []

    def test_static_and_class_methods_untouched(self):
        handler = Recorder()
        stand_in = ProxyFactory().create_intercepting_instance(Account, handler)
        assert stand_in.bank() == "first-national"
        assert stand_in.kind() == "AccountStandIn"
        assert handler.calls == []

    def test_private_members_untouched(self):
        handler = Recorder()
        stand_in = ProxyFactory().create_intercepting_instance(Shape, handler)
        assert stand_in._secret() is None
        assert handler.calls == []

    def test_wrapper_keeps_method_metadata(self):
        stand_in = ProxyFactory().create_intercepting_instance(Account, Recorder())
        assert type(stand_in).get_owner.__name__ == "get_owner"
        assert type(stand_in).get_owner.__wrapped__ is Account.get_owner

    @pytest.mark.parametrize("name", ["tier", "is_frozen", "audit_trail"])
    def test_decorated_methods_route_to_handler(self, name):
        handler = Recorder()
        stand_in = ProxyFactory().create_intercepting_instance(Account, handler)
        assert getattr(stand_in, name)() == "intercepted"
        assert handler.calls[0][1] == name

    def test_named_tuple(self):
        handler = Recorder(0)
        stand_in = ProxyFactory().create_intercepting_instance(Point, handler)
        assert isinstance(stand_in, Point)
        assert stand_in.manhattan() == 0
        assert handler.calls[0][1] == "manhattan"
