from __future__ import annotations

import unittest

from lazypick.accessibility import (
    describe_announcement,
    empty_view_announcement,
    format_announcement,
    item_announcement,
)
from lazypick.picker.types import Announcement, Candidate, RankedCandidate
from lazypick.search.fuzzy import Match
from lazypick.ui_theme import DEFAULT_THEME


def view_of(*candidates: Candidate) -> tuple[RankedCandidate, ...]:
    return tuple(
        RankedCandidate(candidate=c, index=idx, match=Match(text=c.text, score=1.0))
        for idx, c in enumerate(candidates)
    )


class PhrasingTests(unittest.TestCase):
    def test_item_announcement_includes_position_and_state(self) -> None:
        view = view_of(
            Candidate(id="a", text="Edit file", description="Open the editor"),
            Candidate(id="b", text="Archive", disabled=True),
        )

        self.assertEqual(
            item_announcement(view, 0, frozenset(), False),
            Announcement("navigation", "Item 1 of 2: Edit file. Open the editor"),
        )
        self.assertEqual(
            item_announcement(view, 1, frozenset({1}), True).text,
            "Item 2 of 2: Archive. Unavailable. Selected",
        )

    def test_selection_only_mentioned_in_multi_select(self) -> None:
        view = view_of(Candidate(id="a", text="Edit file"))

        self.assertEqual(item_announcement(view, 0, frozenset({0}), False).text, "Item 1 of 1: Edit file")

    def test_no_cursor_means_nothing_to_say(self) -> None:
        self.assertIsNone(item_announcement((), None, frozenset(), False))
        self.assertIsNone(item_announcement(view_of(Candidate(id="a", text="x")), 3, frozenset(), False))

    def test_describe_mentions_extra_data(self) -> None:
        announcement = describe_announcement(Candidate(id="a", text="Deploy", data={"env": "prod"}))

        self.assertEqual(announcement.role, "description")
        self.assertEqual(
            announcement.text,
            "Detailed description for Deploy: no description. Additional data available: dict",
        )

    def test_empty_view(self) -> None:
        self.assertEqual(empty_view_announcement("zzz"), Announcement("warning", "No items match zzz"))
        self.assertEqual(empty_view_announcement("").text, "No items found")


class FormattingTests(unittest.TestCase):
    def test_screen_reader_form_spells_out_role(self) -> None:
        self.assertEqual(
            format_announcement(Announcement("info", "Ready"), screen_reader=True, theme=DEFAULT_THEME),
            "INFO: Ready",
        )
        self.assertEqual(
            format_announcement(Announcement("navigation", "Item 1 of 3: a"), screen_reader=True),
            "NAVIGATION: Item 1 of 3: a",
        )

    def test_visual_form_colours_known_roles(self) -> None:
        self.assertEqual(
            format_announcement(Announcement("error", "Failed"), screen_reader=False, theme=DEFAULT_THEME),
            f"{DEFAULT_THEME.error}Failed{DEFAULT_THEME.reset}",
        )
        self.assertEqual(
            format_announcement(Announcement("navigation", "Item 1 of 3: a"), screen_reader=False, theme=DEFAULT_THEME),
            "Item 1 of 3: a",
        )


if __name__ == "__main__":
    unittest.main()
