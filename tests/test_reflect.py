"""Tests for finch.routing.reflect — which controller members are handlers."""

from types import ModuleType, SimpleNamespace

from finch.routing.reflect import IGNORED_NAMES, reflect, reflect_members, registration_hook


class _Base:
    def inherited(self, request, sink):
        return "base"


class _Controller(_Base):
    label = "not callable"

    def read(self, id, request, sink):
        return id

    def stats(self, request, sink):
        return "stats"

    def _helper(self):
        return "hidden"

    def route(self, router):
        pass

    @property
    def computed(self):
        raise AssertionError("properties must not be evaluated")


class TestReflectObjects:
    def test_class_methods_in_declaration_order(self) -> None:
        assert reflect(_Controller()) == ["read", "stats"]

    def test_deeper_ancestors_are_ignored(self) -> None:
        assert "inherited" not in reflect(_Controller())

    def test_immediate_type_is_included(self) -> None:
        assert reflect(_Base()) == ["inherited"]

    def test_handlers_are_bound(self) -> None:
        controller = _Controller()
        members = dict(reflect_members(controller))
        assert members["read"].__self__ is controller
        assert members["read"]("7", None, None) == "7"

    def test_own_attributes_come_first(self) -> None:
        controller = _Controller()
        controller.ping = lambda request, sink: "pong"
        assert reflect(controller) == ["ping", "read", "stats"]

    def test_own_attribute_shadows_type_member(self) -> None:
        controller = _Controller()
        controller.stats = "now a string"
        assert reflect(controller) == ["read"]

    def test_namespace_controller(self) -> None:
        controller = SimpleNamespace(read=lambda id, req, res: id, _secret=lambda: 1)
        assert reflect(controller) == ["read"]


class TestReflectFiltering:
    def test_route_hook_excluded(self) -> None:
        assert reflect({"route": lambda router: None, "stats": lambda r, s: 1}) == ["stats"]

    def test_underscore_names_excluded(self) -> None:
        assert reflect({"_private": lambda: 1, "__dunder__": lambda: 1}) == []

    def test_object_names_excluded(self) -> None:
        assert reflect({"__str__": lambda: "", "constructor": lambda: None}) == []
        assert "constructor" in IGNORED_NAMES
        assert "__init__" in IGNORED_NAMES

    def test_non_callables_excluded(self) -> None:
        assert reflect({"count": 3, "name": "user", "list": lambda r, s: []}) == ["list"]

    def test_classes_excluded(self) -> None:
        class Model:
            pass

        assert reflect({"Model": Model, "show": lambda r, s: 1}) == ["show"]

    def test_mapping_order_preserved(self) -> None:
        names = ["zeta", "alpha", "mid"]
        assert reflect({n: (lambda r, s: None) for n in names}) == names


class TestReflectModules:
    def _module(self, name: str = "ctl") -> ModuleType:
        module = ModuleType(name)
        exec(
            "import json\n"
            "from os.path import join\n"
            "def read(id, request, sink):\n"
            "    return id\n"
            "def recent(request, sink):\n"
            "    return []\n",
            module.__dict__,
        )
        return module

    def test_imported_helpers_excluded(self) -> None:
        assert reflect(self._module()) == ["read", "recent"]

    def test_dunder_all_wins(self) -> None:
        module = self._module()
        module.__all__ = ["recent", "join"]
        assert reflect(module) == ["join", "recent"]


class TestRegistrationHook:
    def test_object_hook(self) -> None:
        controller = _Controller()
        assert registration_hook(controller) == controller.route

    def test_mapping_hook(self) -> None:
        def hook(router):
            return None

        assert registration_hook({"route": hook}) is hook

    def test_missing_or_not_callable(self) -> None:
        assert registration_hook({"stats": lambda r, s: 1}) is None
        assert registration_hook(SimpleNamespace(route="nope")) is None
