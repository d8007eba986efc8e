"""
Phase 2 Tests: Byte Offset Cache

Covers ByteOffsetCache on its own:
- Correct byte offsets across multi-byte characters
- Hits add no scan work; increasing queries scan the text once
- Byte offset -> code point queries sharing the same entries
- Statistics and clearing
- Concurrent population
"""

from concurrent.futures import ThreadPoolExecutor

from palimpsest.text.cache import ByteOffsetCache, TextPosition, utf8_length

# 2-byte e-acute and o-umlaut
TEXT = "h\N{LATIN SMALL LETTER E WITH ACUTE}llo w\N{LATIN SMALL LETTER O WITH DIAERESIS}rld"


class TestUtf8Length:
    def test_ascii(self):
        assert utf8_length("abc") == 3

    def test_multibyte(self):
        assert utf8_length("\N{EURO SIGN}") == 3
        assert utf8_length("\N{GRINNING FACE}") == 4

    def test_empty(self):
        assert utf8_length("") == 0


class TestByteOffsetLookup:
    """Tests for ByteOffsetCache.byte_offset() / position()."""

    def test_start_of_text(self):
        cache = ByteOffsetCache(TEXT)
        assert cache.byte_offset(0, 0) == 0

    def test_after_two_byte_character(self):
        cache = ByteOffsetCache(TEXT)
        assert cache.byte_offset(2, 2) == 3

    def test_position_triple(self):
        cache = ByteOffsetCache(TEXT)
        assert cache.position(5, 5) == TextPosition(code_unit=5, byte_offset=6, scalar=5)

    def test_end_of_text(self):
        cache = ByteOffsetCache(TEXT)
        assert cache.byte_offset(len(TEXT), len(TEXT)) == utf8_length(TEXT)

    def test_out_of_order_queries_agree(self):
        forward = ByteOffsetCache(TEXT)
        backward = ByteOffsetCache(TEXT)
        points = [1, 4, 7, 9, 11]
        expected = [forward.byte_offset(p, p) for p in points]
        actual = [backward.byte_offset(p, p) for p in reversed(points)]
        assert actual == list(reversed(expected))

    def test_astral_character_code_unit_differs_from_scalar(self):
        text = "\N{GRINNING FACE}ab"
        cache = ByteOffsetCache(text)
        # "a" is code unit 2 but code point 1
        assert cache.byte_offset(2, 1) == 4
        assert cache.byte_offset(3, 2) == 5


class TestByteQueries:
    """Tests for ByteOffsetCache.position_for_byte()."""

    @staticmethod
    def identity(scalar):
        return scalar

    def test_after_two_byte_character(self):
        cache = ByteOffsetCache(TEXT)
        assert cache.position_for_byte(3, self.identity) == TextPosition(code_unit=2, byte_offset=3, scalar=2)

    def test_astral_character(self):
        cache = ByteOffsetCache("\N{GRINNING FACE}ab")

        def code_unit_for(scalar):
            return scalar + 1 if scalar > 0 else 0

        assert cache.position_for_byte(4, code_unit_for) == TextPosition(code_unit=2, byte_offset=4, scalar=1)
        assert cache.position_for_byte(5, code_unit_for) == TextPosition(code_unit=3, byte_offset=5, scalar=2)

    def test_increasing_queries_scan_from_previous_entry(self):
        cache = ByteOffsetCache("x" * 100)
        for offset in (10, 20, 30, 90):
            cache.position_for_byte(offset, self.identity)
        assert cache.scan_steps == 90

    def test_repeat_query_is_a_hit(self):
        cache = ByteOffsetCache(TEXT)
        cache.position_for_byte(7, self.identity)
        steps = cache.scan_steps
        cache.position_for_byte(7, self.identity)
        assert cache.scan_steps == steps
        assert cache.stats["hits"] == 1

    def test_anchors_on_code_unit_entry(self):
        cache = ByteOffsetCache("x" * 100)
        cache.byte_offset(50, 50)
        before = cache.scan_steps
        assert cache.position_for_byte(60, self.identity).scalar == 60
        assert cache.scan_steps - before == 10

    def test_code_unit_query_reuses_byte_entry(self):
        cache = ByteOffsetCache(TEXT)
        cache.position_for_byte(6, self.identity)
        steps = cache.scan_steps
        assert cache.byte_offset(5, 5) == 6
        assert cache.scan_steps == steps
        assert len(cache) == 1


class TestScanWork:
    """Tests for the amortization guarantees."""

    def test_repeat_query_adds_no_scan_steps(self):
        cache = ByteOffsetCache(TEXT)
        cache.byte_offset(7, 7)
        steps = cache.scan_steps
        assert cache.byte_offset(7, 7) == cache.byte_offset(7, 7)
        assert cache.scan_steps == steps

    def test_increasing_queries_scan_from_previous_entry(self):
        text = "x" * 100
        cache = ByteOffsetCache(text)
        for offset in (10, 20, 30, 90):
            cache.byte_offset(offset, offset)
        assert cache.scan_steps == 90

    def test_query_between_entries_anchors_on_lower(self):
        text = "x" * 100
        cache = ByteOffsetCache(text)
        cache.byte_offset(50, 50)
        cache.byte_offset(80, 80)
        before = cache.scan_steps
        assert cache.byte_offset(60, 60) == 60
        assert cache.scan_steps - before == 10


class TestStatsAndClear:
    """Tests for instrumentation."""

    def test_stats(self):
        cache = ByteOffsetCache(TEXT)
        cache.byte_offset(2, 2)
        cache.byte_offset(2, 2)
        cache.byte_offset(5, 5)
        stats = cache.stats
        assert stats["entries"] == 2
        assert stats["hits"] == 1
        assert stats["misses"] == 2
        assert stats["scan_steps"] == 5
        assert stats["hit_rate"] == 33.3

    def test_empty_stats(self):
        stats = ByteOffsetCache("").stats
        assert stats == {"entries": 0, "hits": 0, "misses": 0, "scan_steps": 0, "hit_rate": 0.0}

    def test_contains_and_len(self):
        cache = ByteOffsetCache(TEXT)
        cache.byte_offset(3, 3)
        assert 3 in cache
        assert 4 not in cache
        assert len(cache) == 1

    def test_clear(self):
        cache = ByteOffsetCache(TEXT)
        cache.byte_offset(3, 3)
        cache.clear()
        assert len(cache) == 0
        assert cache.scan_steps == 0
        assert cache.byte_offset(3, 3) == 4

    def test_clear_forgets_byte_entries(self):
        cache = ByteOffsetCache("x" * 100)
        cache.position_for_byte(40, TestByteQueries.identity)
        cache.clear()
        cache.position_for_byte(40, TestByteQueries.identity)
        assert cache.scan_steps == 40


class TestConcurrency:
    """Tests for lock-guarded population."""

    def test_concurrent_queries_agree(self):
        text = ("caf\N{LATIN SMALL LETTER E WITH ACUTE} " * 200)
        cache = ByteOffsetCache(text, thread_safe=True)
        offsets = list(range(0, len(text), 7))

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda o: cache.byte_offset(o, o), offsets))

        assert results == [utf8_length(text[:o]) for o in offsets]
        assert len(cache) == len(offsets)

    def test_unlocked_cache_still_correct(self):
        cache = ByteOffsetCache(TEXT, thread_safe=False)
        assert cache.byte_offset(9, 9) == utf8_length(TEXT[:9])
