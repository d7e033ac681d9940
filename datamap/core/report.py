"""Report builder — text and JSON output for datamap renders."""

import json
from typing import Any

from datamap.core.types import RenderReport


def format_text(report: RenderReport) -> str:
    """Format report as human-readable text."""
    lines = []
    header = f'datamap: {report.output_path}'
    if report.policy:
        header += f' — {report.policy} ranges, lang {report.lang}'
    lines.append(header)
    if report.title:
        lines.append(f'title: {report.title}')
    lines.append('')

    lines.append('── legend')
    for entry in report.legend:
        lines.append(f'  {entry.color}  {entry.label}')
    lines.append('')

    by_color: dict[str, list[str]] = {}
    for code, color in report.painted.items():
        by_color.setdefault(color, []).append(code)
    lines.append('── painted')
    for r in report.ranges:
        codes = sorted(by_color.get(r.color or '', []))
        lines.append(f'  [{r.low}, {r.high}] {r.color}: {len(codes)} ({", ".join(codes)})')
    lines.append('')

    if report.unmatched:
        lines.append(f'UNMATCHED {len(report.unmatched)}: {", ".join(sorted(report.unmatched))}')
    lines.append(f'PAINTED {len(report.painted)}  UNMATCHED {len(report.unmatched)}  RANGES {len(report.ranges)}')
    return '\n'.join(lines)


def format_json(report: RenderReport) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'output': report.output_path,
        'lang': report.lang,
        'policy': report.policy,
    }
    if report.title:
        obj['title'] = report.title

    obj['ranges'] = [r.as_dict() for r in report.ranges]
    obj['legend'] = [e.as_dict() for e in report.legend]
    obj['painted'] = dict(sorted(report.painted.items()))
    obj['unmatched'] = sorted(report.unmatched)
    obj['unlabeled'] = sorted(report.unlabeled)

    obj['summary'] = {
        'painted': len(report.painted),
        'unmatched': len(report.unmatched),
        'ranges': len(report.ranges),
    }
    return json.dumps(obj, indent=2)
