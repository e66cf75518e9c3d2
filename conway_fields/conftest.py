# (C) 2024 Irreducible Inc.

import functools
import pathlib
import types
from typing import Callable, Iterable

import pytest


def pytest_pycollect_makemodule(module_path: pathlib.Path, parent) -> pytest.Module:
    """
    Builds the pytest module as usual, then expands the tests marked with @pytest.mark.parametrize_hypothesis.

    Args:
        module_path (pathlib.Path): path of the collected test module
        parent: parent collector

    Returns:
        pytest.Module: Created module.
    """
    if module_path.name == "__init__.py":
        pkg: pytest.Package = pytest.Package.from_parent(parent, path=module_path)
        return pkg
    mod: pytest.Module = pytest.Module.from_parent(parent, path=module_path)
    expand_parametrize_hypothesis(mod)
    return mod


def _parametrize_hypothesis_mark(obj) -> pytest.Mark | None:
    return next((mark for mark in getattr(obj, "pytestmark", []) if mark.name == "parametrize_hypothesis"), None)


def expand_parametrize_hypothesis(mod: pytest.Module) -> None:
    """
    Replaces every test marked with @pytest.mark.parametrize_hypothesis(name=[decorators, ...], ...) by one copy per
    keyword argument. The copy for `name` is called `<test>_<name>`, is wrapped in the listed hypothesis decorators
    (typically a `settings(...)` and a `given(...)`), and carries @pytest.mark.<name>, so that for example
    `pytest -m fast` runs a single random example while `pytest -m slow` runs a full hypothesis search.

    Args:
        mod (pytest.Module): pytest module
    """
    namespace = getattr(mod.obj, "__dict__", {})
    marked = {
        name: obj for name, obj in namespace.items() if callable(obj) and _parametrize_hypothesis_mark(obj) is not None
    }

    for test_name, test_func in marked.items():
        delattr(mod.obj, test_name)
        mark = _parametrize_hypothesis_mark(test_func)
        assert mark is not None

        if mark.args:
            raise ValueError(
                f"@pytest.mark.parametrize_hypothesis on '{mod.name}.{test_name}' only takes keyword arguments"
            )

        for variant, decorators in mark.kwargs.items():
            if not isinstance(decorators, (list, tuple, set)):
                raise ValueError(
                    f"@pytest.mark.parametrize_hypothesis on '{mod.name}.{test_name}': "
                    + f"value for {variant} is not a list of decorators: {decorators}"
                )
            variant_name = f"{test_name}_{variant}"
            variant_func = copy_with_decorators(test_func, variant_name, decorators)
            setattr(mod.obj, variant_name, getattr(pytest.mark, variant)(variant_func))


def copy_with_decorators(test_func: Callable, new_name: str, decorators: Iterable[Callable]) -> Callable:
    """
    Returns a renamed copy of test_func with the given decorators applied, innermost first.

    Args:
        test_func (Callable): The original test function to be copied.
        new_name (str): The name for the new function
        decorators (Iterable[Callable]): decorators to apply to the new function

    Returns:
        Callable: The new test function.
    """
    new_func: Callable = types.FunctionType(
        code=test_func.__code__,
        globals=test_func.__globals__,
        name=new_name,
        argdefs=test_func.__defaults__,
        closure=test_func.__closure__,
    )
    new_func = functools.update_wrapper(new_func, test_func)
    new_func.__name__ = new_name
    for decorator in decorators:
        if not callable(decorator):
            raise ValueError(f"failed to create test function {new_name}, this is not a decorator: {decorator}")
        new_func = decorator(new_func)
    return new_func
