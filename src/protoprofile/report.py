"""Profile report: classify every profiled field and render the decisions.

The report is built in two steps so nothing is written when a run fails:
``analyze_profile`` produces a ProfileReport, ``render_text`` writes it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

from protoprofile.analysis import (
    FieldAnalysis,
    FieldClassifier,
    Optimization,
    OptimizationDecider,
    Scale,
)
from protoprofile.config import AnalyzeOptions, ThresholdConfig
from protoprofile.errors import PatternError
from protoprofile.profiling.loader import load_access_info
from protoprofile.resolver import NameResolver
from protoprofile.type_mappings import FieldKind

if TYPE_CHECKING:
    from protoprofile.profiling.types import AccessInfo
    from protoprofile.registry import FieldDefinition

logger = logging.getLogger(__name__)

MATCH_ALL = ".*"
UNKNOWN_TYPE = "UNKNOWN"


@dataclass(frozen=True)
class FieldReport:
    """Classification and verdict for one field."""

    field: FieldDefinition
    analysis: FieldAnalysis
    optimization: Optimization
    in_profile: bool

    @property
    def type_label(self) -> str:
        return type_label(self.field)


@dataclass(frozen=True)
class MessageReport:
    """Listed fields of one profiled message type."""

    full_name: str
    profile_name: str
    fields: tuple[FieldReport, ...]


@dataclass(frozen=True)
class ProfileReport:
    """Everything needed to render a profile analysis."""

    thresholds: ThresholdConfig
    messages: tuple[MessageReport, ...] = ()
    unresolved: tuple[str, ...] = ()


def type_label(field: FieldDefinition | None) -> str:
    """Short type name of a field, with ``[]`` appended for repeated fields."""
    if field is None:
        return UNKNOWN_TYPE
    if field.kind is FieldKind.MESSAGE:
        label = field.type_simple_name or UNKNOWN_TYPE
    else:
        label = str(field.kind)
    if field.repeated:
        label += "[]"
    return label


def compile_filter(pattern: str | None) -> re.Pattern[str]:
    """Compile a message filter; an empty pattern matches every message.

    Raises
    ------
        PatternError: If the pattern is not a valid regular expression

    """
    try:
        return re.compile(pattern or MATCH_ALL)
    except re.error as e:
        msg = f"Invalid regular expression {pattern!r}: {e}"
        raise PatternError(msg) from e


def analyze_profile(access_info: AccessInfo, options: AnalyzeOptions) -> ProfileReport:
    """Classify the fields of every profiled message that matches the filter.

    Messages are visited in mangled-name order. Names that do not resolve are
    logged and skipped; they are listed as unresolved only when the filter
    matches the name with its namespace separators normalized.

    Args:
    ----
        access_info: Loaded profile dataset
        options: Analysis options (registry, filter, display flags)

    Returns:
    -------
        ProfileReport with only the fields selected for listing

    Raises:
    ------
        ConfigError: If the registry is missing or thresholds are invalid
        PatternError: If the message filter does not compile

    """
    registry = options.validate()
    message_filter = compile_filter(options.message_filter)
    thresholds = ThresholdConfig.from_access_info(
        access_info, hot_ratio=options.hot_ratio, cold_ratio=options.cold_ratio
    )

    resolver = NameResolver(registry, namespace_separator=options.namespace_separator)
    classifier = FieldClassifier(thresholds)
    decider = OptimizationDecider(options.layout)

    messages: list[MessageReport] = []
    unresolved: list[str] = []
    for message in access_info.sorted_messages():
        descriptor = resolver.resolve(message.name)
        if descriptor is None:
            if message_filter.search(resolver.normalize(message.name)):
                unresolved.append(message.name)
            continue
        if not message_filter.search(descriptor.full_name):
            continue
        if not message.has_profile:
            logger.debug(f"No field data recorded for {descriptor.full_name}")
            continue

        listed: list[FieldReport] = []
        for field in descriptor.fields:
            stats = message.field_stats(field.name)
            analysis = classifier.classify(stats)
            optimization = decider.decide(field, analysis)
            logger.debug(
                f"{field.full_name}: presence={analysis.presence.name} "
                f"usage={analysis.usage.name} optimization={optimization.value}"
            )
            if (
                options.print_all_fields
                or options.print_analysis
                or optimization is not Optimization.NONE
            ):
                listed.append(
                    FieldReport(
                        field=field,
                        analysis=analysis,
                        optimization=optimization,
                        in_profile=stats is not None,
                    )
                )

        if listed:
            messages.append(
                MessageReport(
                    full_name=descriptor.full_name,
                    profile_name=message.name,
                    fields=tuple(listed),
                )
            )

    logger.info(
        f"Analyzed {len(access_info.messages)} profiled messages: "
        f"{len(messages)} reported, {len(unresolved)} unresolved"
    )
    return ProfileReport(
        thresholds=thresholds, messages=tuple(messages), unresolved=tuple(unresolved)
    )


def format_field_line(field_report: FieldReport, print_analysis: bool = False) -> str:
    line = f"  {field_report.type_label} {field_report.field.name}:"
    if print_analysis:
        analysis = field_report.analysis
        if analysis.presence is not Scale.DEFAULT:
            line += f" {analysis.presence.name}_PRESENT"
        if analysis.usage is not Scale.DEFAULT:
            line += f" {analysis.usage.name}_USED"
    if field_report.optimization is not Optimization.NONE:
        line += f" {field_report.optimization.value}"
    return line


def render_text(report: ProfileReport, stream: TextIO, options: AnalyzeOptions) -> None:
    """Write the report as text, one header per message and one line per field."""
    if options.print_unused_threshold:
        stream.write(
            f"Unlikely Used Threshold = {report.thresholds.unlikely_used_threshold}\n"
            "Fields used at most this many times are reported as RARELY_USED\n"
            "-----------------------------------------\n"
        )

    for message in report.messages:
        stream.write(f"Message {message.full_name}\n")
        for field_report in message.fields:
            stream.write(format_field_line(field_report, options.print_analysis) + "\n")


def report_to_dict(report: ProfileReport) -> dict[str, Any]:
    """Convert a report to plain data for YAML/JSON output."""
    return {
        "thresholds": report.thresholds.model_dump(),
        "messages": [
            {
                "name": message.full_name,
                "profile_name": message.profile_name,
                "fields": [
                    {
                        "name": f.field.name,
                        "type": f.type_label,
                        "in_profile": f.in_profile,
                        "presence": f.analysis.presence.name,
                        "usage": f.analysis.usage.name,
                        "optimization": f.optimization.value,
                    }
                    for f in message.fields
                ],
            }
            for message in report.messages
        ],
        "unresolved": list(report.unresolved),
    }


def analyze_profile_to_text(
    stream: TextIO, profile_path: str | Path, options: AnalyzeOptions
) -> ProfileReport:
    """Load a profile, analyze it and write the text report to ``stream``.

    Options and the filter are checked before the profile is read. Nothing is
    written unless the whole analysis succeeds.

    Raises
    ------
        ConfigError: If the registry is missing or thresholds are invalid
        PatternError: If the message filter does not compile
        ProfileNotFoundError: If the profile does not exist
        ProfileParseError: If the profile is malformed

    """
    options.validate()
    compile_filter(options.message_filter)

    access_info = load_access_info(profile_path)
    report = analyze_profile(access_info, options)
    render_text(report, stream, options)
    return report
