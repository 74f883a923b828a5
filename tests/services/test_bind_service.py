"""
Tests for the bind service.

Covers the observable contract of a bind over the sample "tester" schema:
approximate key resolution, per-category conversion, skipped tokens,
scalar fail-fast behaviour and the required-field validity query.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import timedelta
from io import StringIO
from types import SimpleNamespace

import pytest

from argbind_config.loader import build_schema, parse_schema_definition
from argbind_config.schema import BinderSettings
from argbind_kernel.domain.dtos import SkipReason, ValidationResult
from argbind_kernel.domain.introspection import schema_for_dataclass
from argbind_kernel.domain.schema import SchemaBuilder
from argbind_kernel.domain.types import CollectionKind
from argbind_kernel.exceptions import ScalarConversionError
from argbind_kernel.logging_config import StructuredFormatter, configure_logging
from argbind_services.bind_service import (
    BindService,
    bind,
    bind_report,
    is_valid_instance,
    validate_required,
)
from tests.sample_types import Access, Color, Level


class TestKeyResolution:
    def test_exact_key(self, tester_schema):
        assert bind(["iterations=5"], tester_schema).Iterations == 5

    def test_key_case_is_ignored(self, tester_schema):
        assert bind(["ITERATIONS=5"], tester_schema).Iterations == 5

    def test_misspelled_key_within_ceiling(self, tester_schema):
        assert bind(["itterations=5"], tester_schema, max_distance=1).Iterations == 5

    def test_transposed_key(self, tester_schema):
        assert bind(["outptu=x"], tester_schema).Output == "x"

    def test_exact_only_ignores_misspelling(self, tester_schema):
        result = bind_report(["itterations=5"], tester_schema, max_distance=0)
        assert result.instance.Iterations == 0
        assert result.skipped[0].reason == SkipReason.UNRESOLVED

    def test_unrelated_key_ignored(self, tester_schema):
        result = bind_report(["zzzzzz=1"], tester_schema)
        assert result.applied == ()
        assert result.skipped[0].reason == SkipReason.UNRESOLVED

    def test_tie_goes_to_later_field(self):
        schema = SchemaBuilder("s").string("Cat").string("Bat").build()
        instance = bind(["hat=x"], schema, max_distance=1)
        assert instance.Bat == "x"
        assert instance.Cat is None

    def test_later_token_overwrites(self, tester_schema):
        assert bind(["iterations=1", "iterations=2"], tester_schema).Iterations == 2

    def test_negative_ceiling_rejected(self, tester_schema):
        with pytest.raises(ValueError):
            bind([], tester_schema, max_distance=-1)


class TestTokens:
    @pytest.mark.parametrize("token", ["a=b=c", "novalue", "=5", "iterations="])
    def test_malformed_token_ignored(self, tester_schema, token):
        result = bind_report([token, "output=x"], tester_schema)
        assert result.skipped[0].token == token
        assert result.skipped[0].reason == SkipReason.MALFORMED
        assert result.instance.Output == "x"

    def test_empty_sequence(self, tester_schema):
        result = bind_report([], tester_schema)
        assert result.applied == ()
        assert result.skipped == ()
        assert result.instance.Iterations == 0

    def test_generator_input(self, tester_schema):
        tokens = (t for t in ["iterations=3"])
        assert bind(tokens, tester_schema).Iterations == 3


class TestConversion:
    def test_collection(self, tester_schema):
        assert bind(["script=a,b,c"], tester_schema).Script == ("a", "b", "c")

    def test_duration_suffix(self, tester_schema):
        assert bind(["time=36H"], tester_schema).Time == timedelta(hours=36)

    def test_duration_standard_form(self, tester_schema):
        assert bind(["time=1.12:00"], tester_schema).Time == timedelta(days=1, hours=12)

    def test_duration_unknown_suffix_is_zero(self, tester_schema):
        result = bind_report(["time=5X"], tester_schema)
        assert result.instance.Time == timedelta(0)
        assert result.applied_fields == frozenset({"Time"})

    def test_unconvertible_duration_skipped(self, tester_schema):
        result = bind_report(["time=abcS"], tester_schema)
        assert result.skipped[0].reason == SkipReason.UNCONVERTIBLE
        assert result.skipped[0].field == "Time"

    def test_flags(self, rich_schema):
        assert bind(["access=Read,Write"], rich_schema).Access == 3

    def test_enum_and_bool(self, rich_schema):
        instance = bind(["color=BLUE", "enabled=yes", "ratio=0.5"], rich_schema)
        assert instance.Color is Color.BLUE
        assert instance.Enabled is True
        assert instance.Ratio == 0.5

    def test_unknown_enum_name_skipped(self, rich_schema):
        result = bind_report(["color=purple"], rich_schema)
        assert result.instance.Color is None
        assert result.skipped[0].reason == SkipReason.UNCONVERTIBLE

    def test_failed_value_keeps_earlier_value(self, rich_schema):
        result = bind_report(["color=red", "color=purple"], rich_schema)
        assert result.instance.Color is Color.RED
        assert [a.field for a in result.applied] == ["Color"]
        assert result.skipped[0].token == "color=purple"
        assert result.skipped[0].reason == SkipReason.UNCONVERTIBLE

    def test_enum_list(self, rich_schema):
        assert bind(["levels=low,3"], rich_schema).Levels == [Level.LOW, Level.HIGH]

    def test_applied_records_key_and_value(self, tester_schema):
        result = bind_report(["itterations=5"], tester_schema)
        applied = result.applied[0]
        assert (applied.field, applied.key, applied.value) == ("Iterations", "itterations", 5)


class TestScalarFailure:
    def test_raises(self, tester_schema):
        with pytest.raises(ScalarConversionError) as exc_info:
            bind(["iterations=five"], tester_schema)
        assert exc_info.value.token == "five"
        assert exc_info.value.target_type is int

    def test_earlier_fields_stay_set(self):
        target = SimpleNamespace(Output=None, Iterations=0, Inputs=None)
        schema = (
            SchemaBuilder("s", factory=lambda: target)
            .string("Output")
            .scalar("Iterations", int)
            .string("Inputs")
            .build()
        )
        with pytest.raises(ScalarConversionError):
            bind(["output=x", "iterations=five", "inputs=y"], schema)
        assert target.Output == "x"
        assert target.Inputs is None


class TestValidity:
    def test_all_required_set(self, tester_schema):
        instance = bind(["iterations=5", "output=o", "inputs=i"], tester_schema)
        result = validate_required(instance, tester_schema)
        assert result.is_valid
        assert is_valid_instance(instance, tester_schema)

    def test_missing_required_fields(self, tester_schema):
        instance = bind(["iterations=5"], tester_schema)
        result = validate_required(instance, tester_schema)
        assert not result
        assert result.fields == ("Output", "Inputs")
        assert {e.code for e in result.errors} == {"MISSING_REQUIRED_FIELD"}

    def test_failure_needs_errors(self):
        with pytest.raises(ValueError):
            ValidationResult.failure()

    def test_required_left_at_zero_is_invalid(self, tester_schema):
        instance = bind(["iterations=0", "output=o", "inputs=i"], tester_schema)
        assert not is_valid_instance(instance, tester_schema)

    def test_declared_default_counts_as_unset(self):
        schema = SchemaBuilder("s").scalar("Port", int, required=True, default=80).build()
        assert not is_valid_instance(bind([], schema), schema)
        assert is_valid_instance(bind(["port=8080"], schema), schema)


@dataclass
class ServerOptions:
    host: str = field(default="", metadata={"required": True})
    port: int = 80
    timeout: timedelta = timedelta(0)
    access: Access = Access(0)


class TestBindService:
    def test_uses_settings(self, tester_schema):
        service = BindService(tester_schema, BinderSettings(max_distance=0))
        assert service.settings.max_distance == 0
        assert service.bind(["itterations=5"]).Iterations == 0

    def test_default_settings(self, tester_schema):
        service = BindService(tester_schema)
        assert service.schema is tester_schema
        assert service.bind(["itterations=5"]).Iterations == 5

    def test_fresh_instance_per_bind(self, tester_schema):
        service = BindService(tester_schema)
        first = service.bind(["iterations=1"])
        second = service.bind([])
        assert first is not second
        assert second.Iterations == 0

    def test_list_default_not_shared_between_binds(self):
        schema = SchemaBuilder("s").collection("Tags", str, CollectionKind.LIST, default=[]).build()
        first = bind([], schema)
        first.Tags.append("leak")
        assert bind([], schema).Tags == []
        assert schema.field_named("Tags").default == []

    def test_yaml_list_default_not_shared_between_binds(self):
        definition = parse_schema_definition({
            "name": "s",
            "fields": [{"name": "Tags", "type": "list", "element": "str", "default": ["a"]}],
        })
        schema = build_schema(definition)
        bind([], schema).Tags.append("leak")
        assert bind([], schema).Tags == ["a"]

    def test_mutated_default_still_counts_as_unset(self):
        schema = SchemaBuilder("s").collection(
            "Tags", str, CollectionKind.LIST, required=True, default=["a"]
        ).build()
        instance = bind([], schema)
        assert not is_valid_instance(instance, schema)
        instance.Tags.append("b")
        assert is_valid_instance(instance, schema)
        assert not is_valid_instance(bind([], schema), schema)

    def test_dataclass_schema(self):
        service = BindService(schema_for_dataclass(ServerOptions))
        result = service.bind_report(["hots=example.org", "timeout=30S", "access=read|write"])
        options = result.instance
        assert isinstance(options, ServerOptions)
        assert options.host == "example.org"
        assert options.port == 80
        assert options.timeout == timedelta(seconds=30)
        assert options.access == Access.READ | Access.WRITE
        assert service.validate(options).is_valid


class TestBindLogging:
    def _bind_logs(self, args, schema) -> list[dict]:
        stream = StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(StructuredFormatter())
        configure_logging(level=logging.DEBUG, handler=handler)
        bind(args, schema)
        return [json.loads(line) for line in stream.getvalue().splitlines() if line]

    def test_start_and_completion(self, tester_schema):
        logs = self._bind_logs(["iterations=5", "bogus"], tester_schema)
        messages = [r["message"] for r in logs]
        assert messages[0] == "bind_started"
        assert messages[-1] == "bind_completed"
        assert logs[-1]["applied_count"] == 1
        assert logs[-1]["skipped_count"] == 1

    def test_records_share_bind_context(self, tester_schema):
        logs = self._bind_logs(["itterations=5"], tester_schema)
        bind_records = [r for r in logs if r["logger"] == "argbind.services.bind"]
        assert {r["schema_name"] for r in bind_records} == {"tester"}
        assert len({r["bind_id"] for r in bind_records}) == 1

    def test_approximate_resolution_logged(self, tester_schema):
        logs = self._bind_logs(["itterations=5"], tester_schema)
        approx = [r for r in logs if r["message"] == "key_resolved_approximately"]
        assert approx[0]["field"] == "Iterations"
        assert approx[0]["distance"] == 1

    def test_skip_logged_with_reason(self, tester_schema):
        logs = self._bind_logs(["a=b=c"], tester_schema)
        skipped = [r for r in logs if r["message"] == "token_skipped"]
        assert skipped[0]["reason"] == "malformed"
