"""Registering the same callback more than once."""

import pytest

from eventhub import EventHub, Phase


def register_all(hub, cbs):
    return [
        hub.on("a", cbs["cb1"]),
        hub.on("a", cbs["cb1"]),
        hub.on("a", cbs["cb1"], phase=Phase.BUBBLING),
        hub.one("a", cbs["cb1"], phase=Phase.BUBBLING),
        hub.on("a", cbs["cb1"], phase=Phase.CAPTURING),
        hub.on("a", cbs["cb1"], phase=Phase.CAPTURING),
        hub.on("a", cbs["cb1"], phase=Phase.BOTH),
        hub.on("a", cbs["cb1"], phase=Phase.BOTH),
        hub.on("a.b", cbs["cb1"]),
    ]


class TestAllowMultiple:
    def test_everything_is_added(self, hub, cbs):
        assert all(register_all(hub, cbs))

    def test_counts(self, hub, cbs):
        register_all(hub, cbs)

        assert hub.fake.trigger("a") == 2
        assert hub.fake.trigger("a.b", phase=Phase.BUBBLING) == 5
        assert hub.fake.trigger("a.b", phase=Phase.BOTH) == 9
        assert hub.fake.trigger("a.b") == 9


class TestSingle:
    @pytest.fixture(params=["constructor", "setter"])
    def single_hub(self, request):
        if request.param == "constructor":
            return EventHub(allow_multiple=False)
        return EventHub().set_allow_multiple(False)

    def test_only_unique_callbacks_are_added(self, single_hub, cbs):
        """The same callback is accepted once per phase."""
        assert register_all(single_hub, cbs) == [
            True,
            False,
            True,
            False,
            True,
            False,
            False,
            False,
            True,
        ]

    def test_counts(self, single_hub, cbs):
        register_all(single_hub, cbs)

        assert single_hub.fake.trigger("a") == 1
        assert single_hub.fake.trigger("a.b", phase=Phase.BOTH) == 3
        assert single_hub.fake.trigger("a.b") == 3

    def test_different_phase_is_no_duplicate(self, single_hub, cbs):
        assert single_hub.on("x", cbs["cb1"]) is True
        assert single_hub.on("x", cbs["cb1"]) is False
        assert single_hub.on("x", cbs["cb1"], phase=Phase.CAPTURING) is True

    def test_both_is_all_or_nothing(self, single_hub, cbs):
        """BOTH is rejected as a whole when one of its phases is taken."""
        single_hub.on("a", cbs["cb1"], phase=Phase.BUBBLING)
        single_hub.on("a.b", cbs["cb2"])

        assert single_hub.on("a", cbs["cb1"], phase=Phase.BOTH) is False
        assert single_hub.trigger("a.b", phase=Phase.CAPTURING) == 1

    def test_other_callbacks_are_added(self, single_hub, cbs):
        assert single_hub.on("a", cbs["cb1"]) is True
        assert single_hub.on("a", cbs["cb2"]) is True
        assert single_hub.trigger("a") == 2

    def test_removed_callback_can_be_added_again(self, single_hub, cbs):
        single_hub.on("a", cbs["cb1"])
        single_hub.off("a", cbs["cb1"])

        assert single_hub.on("a", cbs["cb1"]) is True

    def test_default_from_constructor(self):
        assert EventHub().allow_multiple is True
        assert EventHub(allow_multiple=False).allow_multiple is False
