"""Structured evaluation report builder.

Aggregates known-answer, roundtrip and SAC results into a single
serializable report for export and CLI display.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from .avalanche import SACResult
from .kat import KATResult
from .roundtrip import RoundtripResult


@dataclass
class EvaluationReport:
    """Complete evaluation report aggregating all analysis results."""
    timestamp: str = ""
    kat_results: List[KATResult] = field(default_factory=list)
    roundtrip_results: List[RoundtripResult] = field(default_factory=list)
    sac_results: List[SACResult] = field(default_factory=list)

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize full report for JSON export."""
        return {
            "timestamp": self.timestamp,
            "kat": [k.to_dict() for k in self.kat_results],
            "roundtrip": [r.to_dict() for r in self.roundtrip_results],
            "sac": [s.to_dict() for s in self.sac_results],
            "summary": {
                "total_variants_tested": len({r.variant for r in self.roundtrip_results} | {k.variant for k in self.kat_results}),
                "kat_all_pass": all(k.passed for k in self.kat_results),
                "roundtrip_all_pass": all(r.is_perfect for r in self.roundtrip_results),
                "sac_all_pass": all(s.passes_sac for s in self.sac_results),
                "failing_variants": self.failing_variants(),
            },
        }

    def to_summary(self) -> str:
        """Human-readable summary for the CLI."""
        lines = [f"Evaluation Report ({self.timestamp})", "=" * 50]

        if self.kat_results:
            kat_pass = sum(1 for k in self.kat_results if k.passed)
            lines.append(f"\nKnown-answer vectors: {kat_pass}/{len(self.kat_results)} pass")
            for k in self.kat_results:
                lines.append(f"  {k.summary()}")

        if self.roundtrip_results:
            rt_pass = sum(1 for r in self.roundtrip_results if r.is_perfect)
            lines.append(f"\nRoundtrip Tests: {rt_pass}/{len(self.roundtrip_results)} variants pass")
            for r in self.roundtrip_results:
                lines.append(f"  {r.summary()}")

        if self.sac_results:
            sac_pass = sum(1 for s in self.sac_results if s.passes_sac)
            lines.append(f"\nSAC Analysis: {sac_pass}/{len(self.sac_results)} pass")
            for s in self.sac_results:
                lines.append(f"  {s.summary()}")

        return "\n".join(lines)

    def failing_variants(self) -> List[str]:
        """Variants with a known-answer or roundtrip failure, in first-seen order."""
        bad = [k.variant for k in self.kat_results if not k.passed]
        bad += [r.variant for r in self.roundtrip_results if not r.is_perfect]
        return list(dict.fromkeys(bad))

    def weak_sac_variants(self) -> List[str]:
        return [s.variant for s in self.sac_results if not s.passes_sac]
