from typing import TYPE_CHECKING, Annotated, Callable, ClassVar, Optional

import pytest

from beanery.domain import Inject, InjectionPoint
from beanery.errors import BeanDefinitionError
from beanery.injection import annotated_fields, injection_points, type_names


class Quoter:
    pass


class Book:
    quoter: Annotated[Quoter, Inject()] = None
    backup: Annotated[Quoter, Inject("duneQuoter")] = None
    optional: Optional[Annotated[Quoter, Inject()]] = None
    title: str = "untitled"
    registry: ClassVar[dict] = {}


class Sequel(Book):
    callback: Annotated[Callable[[str], str], Inject()] = None


if TYPE_CHECKING:
    from decimal import Decimal


class Broken:
    quoter: Annotated["DoesNotExist", Inject()] = None  # noqa: F821


class BrokenByString:
    quoter: "Annotated[DoesNotExist, Inject()]" = None  # noqa: F821


class Ledger:
    total: "Decimal" = None
    quoter: Annotated[Quoter, Inject()] = None


def test_marked_fields_are_injection_points():
    assert injection_points(Book) == (
        InjectionPoint("quoter", Quoter, None),
        InjectionPoint("backup", Quoter, "duneQuoter"),
        InjectionPoint("optional", Quoter, None),
    )


def test_injection_points_include_base_class_fields():
    points = {point.field_name: point for point in injection_points(Sequel)}

    assert set(points) == {"quoter", "backup", "optional", "callback"}
    assert points["callback"].declared_type.__name__ == "Callable"


def test_injection_points_are_cached_per_class():
    assert injection_points(Book) is injection_points(Book)


def test_annotated_fields_include_unmarked_fields_but_not_class_vars():
    names = [point.field_name for point in annotated_fields(Book)]

    assert names == ["quoter", "backup", "optional", "title"]


def test_class_without_annotations_has_no_injection_points():
    assert injection_points(int) == ()


def test_unresolvable_marked_annotation_is_definition_error():
    with pytest.raises(BeanDefinitionError, match=r"Broken\.quoter"):
        injection_points(Broken)


def test_unresolvable_marked_string_annotation_is_definition_error():
    with pytest.raises(BeanDefinitionError, match=r"BrokenByString\.quoter"):
        injection_points(BrokenByString)


def test_unresolvable_unmarked_annotation_is_skipped():
    assert injection_points(Ledger) == (InjectionPoint("quoter", Quoter, None),)
    assert [point.field_name for point in annotated_fields(Ledger)] == ["quoter"]


def test_string_annotations_are_evaluated_per_field():
    class Deferred:
        quoter: "Annotated[Quoter, Inject()]" = None
        title: "str" = ""

    assert injection_points(Deferred) == (InjectionPoint("quoter", Quoter, None),)
    assert [point.field_name for point in annotated_fields(Deferred)] == ["quoter", "title"]


def test_type_names_include_simple_and_qualified_name():
    assert type_names(Quoter) == {"Quoter", f"{__name__}.Quoter"}


def test_type_names_of_missing_type_is_empty():
    assert type_names(None) == frozenset()
