"""Unsupported types, and registering support for new ones."""

import logging

import pytest
from attrs import define

from bizarro import Table, UnsupportedCategory, bizarro, factor, is_supported, register


class Widget:
    pass


def test_unsupported():
    with pytest.raises(UnsupportedCategory, match="Don't know how to make bizarro <Widget>"):
        bizarro(Widget())


def test_unsupported_category_attribute():
    with pytest.raises(UnsupportedCategory) as info:
        bizarro({"a": 1})
    assert info.value.category == "dict"
    assert isinstance(info.value, TypeError)


def test_unsupported_none():
    with pytest.raises(UnsupportedCategory, match=r".*NoneType.*"):
        bizarro(None)


def test_unsupported_in_table_column():
    table = Table({"w": [Widget()]})
    with pytest.raises(UnsupportedCategory, match=r".*Widget.*"):
        bizarro(table)


def test_unsupported_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="bizarro"):
        with pytest.raises(UnsupportedCategory):
            bizarro(Widget())
    assert "Widget" in caplog.text


def test_is_supported():
    assert is_supported("abc")
    assert is_supported(1)
    assert is_supported(True)
    assert is_supported([1])
    assert is_supported(factor(["a"]))
    assert is_supported(Table({}))
    assert not is_supported(Widget())
    assert not is_supported(None)


def test_register_decorator():
    @define
    class Point:
        x: float
        y: float

    assert not is_supported(Point(1, 2))

    @register(Point)
    def _(p):
        return Point(bizarro(p.x), bizarro(p.y))

    assert is_supported(Point(1, 2))
    assert bizarro(Point(1, 2)) == Point(-1, -2)
    assert bizarro([Point(0, 1)]) == [Point(0, -1)]


def test_register_annotation():
    @define
    class Word:
        text: str

    @register
    def _(w: Word) -> Word:
        return Word(bizarro(w.text))

    assert bizarro(Word("stressed")) == Word("desserts")


def test_register_functional():
    class Celsius(float):
        pass

    register(Celsius, lambda c: Celsius(273.15 * 2 - c))
    assert bizarro(Celsius(0.0)) == pytest.approx(546.3)


def test_register_subclass_dispatch():
    """Subclasses of a registered type use the parent's implementation."""

    class Base:
        pass

    class Derived(Base):
        pass

    register(Base, lambda _: "flipped")
    assert bizarro(Derived()) == "flipped"


def test_register_is_logged(caplog):
    class Gadget:
        pass

    with caplog.at_level(logging.DEBUG, logger="bizarro"):
        register(Gadget, lambda g: g)
    assert "Gadget" in caplog.text
