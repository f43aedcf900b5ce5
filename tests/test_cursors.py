import itertools

import pytest

from lazyviews import NoSuchElementError, UnsupportedOperationError, view_of
from lazyviews.cursors import SourceCursor


class TestSourceCursor:
    def test_has_next_is_idempotent(self, tracked):
        source = tracked([1, 2])
        cursor = SourceCursor(source)
        assert cursor.has_next()
        assert cursor.has_next()
        assert source.pulled == [1]
        assert cursor.next() == 1
        assert cursor.next() == 2
        assert not cursor.has_next()

    def test_next_past_end(self):
        cursor = SourceCursor([])
        with pytest.raises(NoSuchElementError):
            cursor.next()

    def test_python_iterator_protocol(self):
        assert list(SourceCursor("abc")) == ["a", "b", "c"]


class TestReadOnly:
    @pytest.mark.parametrize("build", [
        lambda v: v,
        lambda v: v.map(str),
        lambda v: v.filter(bool),
        lambda v: v.unique(),
        lambda v: v.concatenate([4]),
        lambda v: v.limit(2),
        lambda v: v.skip(1),
        lambda v: v.expand(5, 0),
        lambda v: v.grouped(2),
        lambda v: v.natural_order(),
        lambda v: v.read_only_view(),
    ])
    def test_remove_is_unsupported(self, build):
        cursor = build(view_of([1, 2, 3])).cursor()
        cursor.next()
        with pytest.raises(UnsupportedOperationError):
            cursor.remove()

    def test_unsupported_is_a_type_error(self):
        with pytest.raises(TypeError):
            view_of([1]).cursor().remove()


class TestIndependence:
    def test_cursors_from_one_view_do_not_share_state(self):
        view = view_of([1, 2, 3]).map(lambda x: x * 10)
        first, second = view.cursor(), view.cursor()
        assert first.next() == 10
        assert first.next() == 20
        assert second.next() == 10
        assert first.next() == 30
        assert second.next() == 20

    def test_view_is_reiterable(self):
        view = view_of([3, 1, 2]).filter(lambda x: x > 1).map(str)
        assert view.as_list() == ["3", "2"]
        assert view.as_list() == ["3", "2"]


class TestMap:
    def test_no_work_until_pulled(self):
        calls = []

        def double(x):
            calls.append(x)
            return x * 2

        view = view_of([1, 2, 3]).map(double)
        assert calls == []
        assert list(itertools.islice(view, 2)) == [2, 4]
        assert calls == [1, 2]

    def test_infinite_source(self):
        assert view_of(itertools.count()).map(lambda x: x * x).first(4).as_list() == [0, 1, 4, 9]

    def test_next_past_end(self):
        cursor = view_of([1]).map(str).cursor()
        cursor.next()
        with pytest.raises(NoSuchElementError):
            cursor.next()


class TestFilter:
    def test_shunt_receives_rejected_in_order(self, tracked):
        rejected = []
        source = tracked([1, 2, 3, 4, 5])
        cursor = view_of(source).filter(lambda x: x % 2 == 0, rejected.append).cursor()

        assert cursor.has_next()
        assert rejected == [1]
        assert source.pulled == [1, 2]

        assert cursor.has_next()
        assert rejected == [1]
        assert source.pulled == [1, 2]

        assert cursor.next() == 2
        assert cursor.next() == 4
        assert rejected == [1, 3]
        assert not cursor.has_next()
        assert not cursor.has_next()
        assert rejected == [1, 3, 5]

    def test_next_without_has_next(self):
        cursor = view_of([1, 2, 3, 4]).filter(lambda x: x > 2).cursor()
        assert cursor.next() == 3
        assert cursor.next() == 4
        with pytest.raises(NoSuchElementError):
            cursor.next()

    def test_all_rejected(self):
        rejected = []
        view = view_of([1, 3]).filter(lambda x: x % 2 == 0, rejected.append)
        assert view.is_empty()
        assert rejected == [1, 3]

    def test_infinite_source(self):
        evens = view_of(itertools.count()).filter(lambda x: x % 2 == 0)
        assert evens.limit(3).as_list() == [0, 2, 4]


class TestUnique:
    def test_first_occurrence_order(self):
        assert view_of([3, 1, 3, 2, 1]).unique().as_list() == [3, 1, 2]

    def test_drains_upstream_when_cursor_opens(self, tracked):
        source = tracked([3, 1, 3, 2, 1])
        view = view_of(source).unique()
        assert source.pulled == []
        cursor = view.cursor()
        assert source.pulled == [3, 1, 3, 2, 1]
        assert cursor.next() == 3

    def test_each_cursor_drains_again(self, tracked):
        source = tracked([1, 1])
        view = view_of(source).unique()
        view.as_list()
        view.as_list()
        assert source.opened == 2


class TestConcatenate:
    def test_order(self):
        assert view_of([1, 2]).concatenate([3, 4]).as_list() == [1, 2, 3, 4]

    def test_second_source_opened_only_after_first_runs_dry(self, tracked):
        first, second = tracked([1, 2]), tracked([3])
        cursor = view_of(first).concatenate(second).cursor()
        assert cursor.next() == 1
        assert cursor.next() == 2
        assert second.opened == 0
        assert cursor.has_next()
        assert second.opened == 1
        assert cursor.next() == 3
        assert not cursor.has_next()
        assert second.opened == 1

    def test_empty_first(self):
        assert view_of([]).concatenate([1]).as_list() == [1]

    def test_infinite_first_operand(self):
        view = view_of(itertools.count()).concatenate([-1])
        assert view.first(3).as_list() == [0, 1, 2]

    def test_view_operand(self):
        other = view_of([5, 6]).map(lambda x: x + 1)
        assert view_of([1]).concatenate(other).as_list() == [1, 6, 7]


class TestLimit:
    def test_shorter_source(self):
        assert view_of([1, 2, 3]).limit(5).as_list() == [1, 2, 3]

    def test_truncates(self):
        assert view_of([1, 2, 3]).limit(2).as_list() == [1, 2]

    def test_never_pulls_past_the_limit(self, tracked):
        source = tracked(range(10))
        assert view_of(source).limit(2).as_list() == [0, 1]
        assert source.pulled == [0, 1]

    def test_zero(self):
        assert view_of([1]).limit(0).as_list() == []

    def test_failed_pull_does_not_count(self):
        def half(x):
            if x == 1:
                raise ZeroDivisionError(x)
            return x // 2

        cursor = view_of([1, 2, 4, 6]).map(half).limit(2).cursor()
        with pytest.raises(ZeroDivisionError):
            cursor.next()
        assert list(cursor) == [1, 2]

    def test_next_past_limit(self):
        cursor = view_of([1, 2]).limit(1).cursor()
        cursor.next()
        with pytest.raises(NoSuchElementError):
            cursor.next()


class TestSkip:
    def test_skips_when_cursor_opens(self, tracked):
        source = tracked([1, 2, 3, 4])
        view = view_of(source).skip(2)
        assert source.pulled == []
        cursor = view.cursor()
        assert source.pulled == [1, 2]
        assert cursor.next() == 3

    def test_skip_past_end(self):
        assert view_of([1, 2]).skip(5).as_list() == []

    def test_from_alias(self):
        assert view_of([1, 2, 3]).from_(1).as_list() == [2, 3]

    def test_slice(self):
        assert view_of([1, 2, 3, 4, 5]).slice(1, 2).as_list() == [2, 3]


class TestExpand:
    def test_pads(self):
        assert view_of([1, 2]).expand(4, 0).as_list() == [1, 2, 0, 0]

    def test_truncates_longer_source(self, tracked):
        source = tracked([1, 2, 3])
        assert view_of(source).expand(2, 0).as_list() == [1, 2]
        assert source.pulled == [1, 2]

    def test_exact_size(self):
        assert view_of([1, 2]).expand(2, 0).as_list() == [1, 2]

    def test_empty_source(self):
        assert view_of([]).expand(3, None).as_list() == [None, None, None]

    def test_infinite_source(self):
        assert view_of(itertools.count()).expand(3, -1).as_list() == [0, 1, 2]

    def test_next_past_size(self):
        cursor = view_of([]).expand(1, "x").cursor()
        assert cursor.next() == "x"
        with pytest.raises(NoSuchElementError):
            cursor.next()
