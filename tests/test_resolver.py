import pytest

from beanery.domain import InjectionPoint
from beanery.errors import BeanDefinitionError, NoSuchBeanError, NoUniqueBeanError
from beanery.resolver import DependencyResolver, beans_of_type


class Quoter:
    pass


class HarryPotterQuoter(Quoter):
    pass


class DuneQuoter(Quoter):
    pass


class RandomQuoter(Quoter):
    pass


@pytest.fixture
def resolver() -> DependencyResolver:
    return DependencyResolver()


@pytest.fixture
def beans() -> dict:
    return {"hp": HarryPotterQuoter(), "dune": DuneQuoter()}


def test_resolve_by_name_returns_exact_instance(resolver, beans):
    assert resolver.resolve_by_name(beans, "hp") is beans["hp"]


def test_resolve_by_name_fails_for_absent_name(resolver, beans):
    with pytest.raises(NoSuchBeanError, match="'lotr'") as error:
        resolver.resolve_by_name(beans, "lotr")

    assert error.value.key == "lotr"


def test_resolve_by_name_fails_for_vetoed_bean(resolver):
    with pytest.raises(NoSuchBeanError, match="vetoed"):
        resolver.resolve_by_name({"hp": None}, "hp")


def test_resolve_by_type_returns_single_candidate(resolver, beans):
    assert resolver.resolve_by_type(beans, DuneQuoter) is beans["dune"]


def test_resolve_by_type_fails_without_candidates(resolver, beans):
    with pytest.raises(NoSuchBeanError, match="RandomQuoter"):
        resolver.resolve_by_type(beans, RandomQuoter)


def test_resolve_by_type_fails_with_several_candidates(resolver, beans):
    with pytest.raises(NoUniqueBeanError, match=r"found 2: \['dune', 'hp'\]") as error:
        resolver.resolve_by_type(beans, Quoter)

    assert error.value.bean_type is Quoter
    assert error.value.candidates == ["dune", "hp"]


def test_resolve_by_type_excludes_requesting_type(resolver):
    beans = {"random": RandomQuoter(), "hp": HarryPotterQuoter()}

    assert resolver.resolve_by_type(beans, Quoter, RandomQuoter) is beans["hp"]


def test_excluded_type_leaves_no_candidates(resolver):
    with pytest.raises(NoSuchBeanError):
        resolver.resolve_by_type({"random": RandomQuoter()}, Quoter, RandomQuoter)


def test_vetoed_beans_are_not_type_candidates(resolver):
    beans = {"hp": HarryPotterQuoter(), "dune": None}

    assert resolver.resolve_by_type(beans, Quoter) is beans["hp"]


def test_resolving_twice_yields_identical_instance(resolver, beans):
    point = InjectionPoint("quoter", DuneQuoter)
    owner = object()

    assert resolver.resolve(point, owner, beans) is resolver.resolve(point, owner, beans)


def test_resolve_prefers_qualifier_over_type(resolver, beans):
    point = InjectionPoint("quoter", Quoter, "dune")

    assert resolver.resolve(point, object(), beans) is beans["dune"]


def test_resolve_by_qualifier_allows_self_reference(resolver):
    owner = RandomQuoter()

    assert resolver.resolve(InjectionPoint("me", Quoter, "me"), owner, {"me": owner}) is owner


def test_resolve_excludes_owner_type(resolver):
    owner = RandomQuoter()
    beans = {"random": owner, "hp": HarryPotterQuoter()}

    assert resolver.resolve(InjectionPoint("delegate", Quoter), owner, beans) is beans["hp"]


def test_resolve_without_type_or_qualifier_fails(resolver, beans):
    with pytest.raises(BeanDefinitionError, match="Inject marker a bean name"):
        resolver.resolve(InjectionPoint("anything", None), object(), beans)


def test_beans_of_type_keeps_map_order():
    beans = {"hp": HarryPotterQuoter(), "none": None, "dune": DuneQuoter(), "n": 1}

    assert list(beans_of_type(beans, Quoter)) == ["hp", "dune"]
