"""Tests for client-side id generation."""

import re
import time

from clientele.ids import ID_LENGTH, ID_PREFIX, new_id

ID_FORMAT = re.compile(r"^c[0-9a-z]{24}$")


class TestNewId:
    """Tests for new_id."""

    def test_format(self) -> None:
        value = new_id()

        assert len(value) == ID_LENGTH == 25
        assert value.startswith(ID_PREFIX)
        assert ID_FORMAT.match(value)

    def test_unique(self) -> None:
        assert len({new_id() for _ in range(1000)}) == 1000

    def test_later_ids_sort_after_earlier(self) -> None:
        first = new_id()
        time.sleep(0.002)
        second = new_id()

        assert first[:9] < second[:9]
