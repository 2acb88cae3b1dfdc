"""
Property-based tests for path access and transform invariants.

Tests properties related to:
- get/set round trips
- Output cardinality
- Field removal
- Empty inputs
"""

from hypothesis import assume, given, settings, strategies as st

from datatransform import MappingSpec, transform
from datatransform.paths import MISSING, get_value, halts_traversal, set_value

keys = st.text(alphabet="abcdefghij", min_size=1, max_size=5)
scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-1000, max_value=1000),
    st.text(max_size=10),
)
records = st.recursive(
    st.dictionaries(keys, scalars, max_size=4),
    lambda children: st.dictionaries(keys, st.one_of(scalars, children), max_size=4),
    max_leaves=12,
)
paths = st.lists(keys, min_size=1, max_size=4).map(".".join)


def writable(record: dict, path: str) -> bool:
    """True when no intermediate segment holds a non-record value."""
    current = record
    for key in path.split(".")[:-1]:
        value = current.get(key)
        if halts_traversal(value):
            return True
        if not isinstance(value, dict):
            return False
        current = value
    return True


@given(record=records, path=paths, value=scalars)
def test_set_then_get_round_trip(record, path, value):
    """A written value is read back from the same path."""
    assume(writable(record, path))
    set_value(record, path, value)
    assert get_value(record, path) == value


@given(record=records, path=paths)
def test_get_never_raises(record, path):
    """Reads of arbitrary paths never raise."""
    get_value(record, path)


@given(
    items=st.lists(scalars, max_size=6),
    offset=st.integers(min_value=0, max_value=9),
    value=scalars,
)
def test_list_index_write_round_trip(items, offset, value):
    """Index writes replace or extend a list and read back."""
    record = {"l": list(items)}
    index = offset % (len(items) + 4)
    set_value(record, f"l.{index}", value)
    assert get_value(record, f"l.{index}") == value
    assert len(record["l"]) == max(len(items), index + 1)
    assert record["l"][: min(index, len(items))] == items[: min(index, len(items))]


@given(
    items=st.lists(scalars, max_size=4),
    segment=st.text(
        alphabet=st.characters(categories=["Nd", "No", "Ll"]),
        min_size=1,
        max_size=3,
    ),
)
def test_get_on_list_never_raises(items, segment):
    """Reads of any segment on a list never raise."""
    get_value({"l": items}, f"l.{segment}")


@given(record=records, path=paths)
def test_miss_resolves_to_default(record, path):
    """A miss resolves to the declared default for the output field."""
    spec = MappingSpec(defaults={"out": "fallback"})
    plain = get_value(record, path)
    with_default = get_value(record, path, "out", None, spec)
    if plain is MISSING:
        assert with_default == "fallback"
    else:
        assert with_default == plain


@given(items=st.lists(records, max_size=8))
@settings(max_examples=50)
def test_list_path_preserves_length(items):
    """A list-directed spec yields one output per source record."""
    spec = MappingSpec(list_path="rows", item={"copy": "a"})
    result = transform({"rows": items}, spec)
    assert isinstance(result, list)
    assert len(result) == len(items)


@given(record=records)
def test_single_record_yields_single_record(record):
    """A single record input without a list path yields a single record."""
    result = transform(record, MappingSpec(item={"copy": "a"}))
    assert isinstance(result, dict)


@given(items=st.lists(records, min_size=1, max_size=8), names=st.lists(keys, max_size=3))
@settings(max_examples=50)
def test_remove_deletes_exactly_named_fields(items, names):
    """Remove drops the named fields and keeps every other field."""
    result = transform(items, MappingSpec(remove=names))
    for original, output in zip(items, result):
        expected = {k: v for k, v in original.items() if k not in names}
        assert output == expected


@given(
    item=st.one_of(st.none(), st.just({"x": "a"}), st.just("a")),
    names=st.lists(keys, max_size=2),
)
def test_empty_list_always_yields_empty_list(item, names):
    """An empty working list short-circuits every stage."""
    spec = MappingSpec(
        list_path="rows",
        item=item,
        remove=names,
        operate=[(lambda value, context: 1 / 0, "x")],
        each=lambda *args: 1 / 0,
    )
    assert transform({"rows": []}, spec) == []
    assert transform([], MappingSpec(item=item)) == []
