"""Property-based tests for cause construction and dispatch.

Tests the existence rule, pass-through of extra fields, taxonomy naming,
and routing for arbitrary cause names.
"""

import pytest
from hypothesis import assume, given, settings, strategies as st

from error_causes.errors import CausedError, create_error, error_causes, noop
from error_causes.errors.factory import RECOGNIZED_FIELDS


# =============================================================================
# Strategies
# =============================================================================

non_empty_text = st.text(min_size=1, max_size=50)

# Present codes: numeric or non-empty string
codes = st.one_of(st.integers(min_value=0, max_value=999), non_empty_text)

cause_names = st.from_regex(r"^[A-Z][A-Za-z0-9]{0,20}$", fullmatch=True)

extra_keys = st.from_regex(r"^[a-z][a-z0-9_]{0,15}$", fullmatch=True).filter(
    lambda key: key not in RECOGNIZED_FIELDS
)

extra_values = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.text(max_size=20),
    st.lists(st.integers(), max_size=5),
)

templates = st.fixed_dictionaries(
    {},
    optional={"code": codes, "message": non_empty_text, "name": non_empty_text},
)


@pytest.mark.property
class TestCreateErrorProperties:
    """Property tests for create_error."""

    @given(name=non_empty_text, message=non_empty_text, code=codes)
    @settings(max_examples=100)
    def test_cause_matches_options_exactly(self, name, message, code):
        """Present name, message and code are copied with no extra keys."""
        error = create_error({"name": name, "message": message, "code": code})
        assert error.cause == {"name": name, "message": message, "code": code}

    @given(st.dictionaries(st.sampled_from(RECOGNIZED_FIELDS), st.sampled_from([None, ""])))
    @settings(max_examples=50)
    def test_absent_values_never_copied(self, options):
        """None and empty recognized fields never reach the cause."""
        assert create_error(options).cause == {}

    @given(st.dictionaries(extra_keys, extra_values, max_size=8))
    @settings(max_examples=100)
    def test_extra_fields_pass_through(self, extras):
        """Unrecognized fields are copied verbatim."""
        assert create_error(extras).cause == extras

    @given(stack=non_empty_text)
    @settings(max_examples=50)
    def test_caller_stack_unchanged(self, stack):
        """A caller-supplied stack is stored as given."""
        assert create_error({"stack": stack}).cause["stack"] == stack

    @given(
        name=cause_names,
        message=st.text(alphabet=st.characters(exclude_characters="\n"), max_size=30),
    )
    @settings(max_examples=50)
    def test_factory_frame_never_in_stack(self, name, message):
        """create_error's own frame is always filtered out."""
        error = create_error({"name": name, "message": message})
        assert "at create_error (" not in error.stack
        assert error.stack.split("\n")[0] == f"CausedError: {message}"


@pytest.mark.property
class TestTaxonomyProperties:
    """Property tests for error_causes."""

    @given(st.dictionaries(cause_names, templates, max_size=10))
    @settings(max_examples=100)
    def test_definitions_named_by_key(self, causes):
        """Every definition carries its key as name, other fields intact."""
        taxonomy, _ = error_causes(causes)
        assert list(taxonomy) == list(causes)
        for key, template in causes.items():
            assert taxonomy[key] == {**template, "name": key}

    @given(st.lists(cause_names, min_size=1, max_size=10, unique=True), st.data())
    @settings(max_examples=50)
    def test_any_missing_handler_rejected(self, names, data):
        """Dropping any handler from a complete table is rejected naming it."""
        _, handle_errors = error_causes({name: {} for name in names})
        missing = data.draw(st.sampled_from(names))
        handlers = {name: noop for name in names if name != missing}
        with pytest.raises(CausedError) as exc_info:
            handle_errors(handlers)
        assert exc_info.value.cause["name"] == "MissingHandler"
        assert exc_info.value.cause["message"].endswith(f": {missing}")

    @given(st.lists(cause_names, min_size=1, max_size=10, unique=True), st.data())
    @settings(max_examples=50)
    def test_registered_names_route_to_their_handler(self, names, data):
        """Each registered name reaches its own handler."""
        _, handle_errors = error_causes({name: {} for name in names})
        dispatch = handle_errors({name: (lambda e, n=name: n) for name in names})
        target = data.draw(st.sampled_from(names))
        assert dispatch(create_error(name=target)) == target

    @given(st.lists(cause_names, max_size=10, unique=True), cause_names)
    @settings(max_examples=50)
    def test_unregistered_names_rejected(self, names, unknown):
        """A name outside the handler table raises UnexpectedError naming it."""
        assume(unknown not in names)
        _, handle_errors = error_causes({name: {} for name in names})
        dispatch = handle_errors({name: noop for name in names})
        with pytest.raises(CausedError) as exc_info:
            dispatch(create_error(name=unknown))
        assert exc_info.value.cause["name"] == "UnexpectedError"
        assert unknown in exc_info.value.cause["message"]
