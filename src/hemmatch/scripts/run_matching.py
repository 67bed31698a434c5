"""
Script para calcular el match de preferencias de una propiedad.

Carga la propiedad, las preferencias del usuario y las features,
calcula el score y lo guarda en el análisis de la propiedad.

Uso:
    python -m hemmatch.scripts.run_matching --property-id <uuid> --user-id <uuid>
    python -m hemmatch.scripts.run_matching --property-id <uuid> --user-id <uuid> --no-persist --json
    python -m hemmatch.scripts.run_matching --property-id <uuid> --user-id <uuid> --explain
"""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from typing import TYPE_CHECKING, Optional

import structlog

from hemmatch.config import get_settings
from hemmatch.matching import (
    PreferenceMatchReport,
    PreferenceMatchService,
    PreferencesNotFoundError,
    PropertyNotFoundError,
)
from hemmatch.scoring import importance_label, match_quality_description, sorted_matches

if TYPE_CHECKING:
    from hemmatch.analysis import MatchExplanation

logger = structlog.get_logger()


def configure_logging(log_level: str) -> None:
    """Configura logging estándar + structlog con salida de consola."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def format_report(report: PreferenceMatchReport) -> str:
    """Resumen legible del resultado."""
    result = report.result
    lines = [
        f"Matchning: {result.percentage}% - {match_quality_description(result.percentage)}",
        f"Poäng: {result.score:g} / {result.max_score:g}",
        "",
    ]
    for _feature_id, match in sorted_matches(result):
        mark = "✓" if match.matched else "✗"
        lines.append(f"  {mark} {match.feature_label} ({importance_label(match.importance)})")
    return "\n".join(lines)


def format_explanation(explanation: "MatchExplanation") -> str:
    lines = ["", explanation.summary]
    lines.extend(f"  + {s}" for s in explanation.strengths)
    lines.extend(f"  - {g}" for g in explanation.gaps)
    return "\n".join(lines)


async def _explain(report: PreferenceMatchReport) -> "MatchExplanation":
    from hemmatch.analysis import MatchExplainer

    return await MatchExplainer().explain(
        report.property_row,
        report.result,
        report.preferences,
        report.features,
    )


def run_matching(
    property_id: str,
    user_id: str,
    persist: bool = True,
    explain: bool = False,
    as_json: bool = False,
    service: Optional[PreferenceMatchService] = None,
) -> str:
    """
    Calcula el match y devuelve la salida a imprimir.

    Args:
        property_id: UUID de la propiedad
        user_id: UUID del usuario
        persist: Guardar en property_analyses
        explain: Agregar explicación generada por LLM (clave 'explanation' en JSON)
        as_json: Salida como JSON (formato de 'preference_match')
    """
    service = service or PreferenceMatchService()
    report = service.calculate(property_id, user_id, persist=persist)
    explanation = asyncio.run(_explain(report)) if explain else None

    if as_json:
        payload = {
            "propertyFeatures": report.property_features,
            "matchResult": report.result.to_db_dict(),
            "persisted": report.persisted,
        }
        if explanation is not None:
            payload["explanation"] = asdict(explanation)
        return json.dumps(payload, ensure_ascii=False, indent=2)

    output = format_report(report)
    if explanation is not None:
        output += format_explanation(explanation)
    return output


def main(argv: Optional[list[str]] = None):
    """Entry point del script."""
    parser = argparse.ArgumentParser(description="Calcula el match de preferencias de una propiedad")
    parser.add_argument("--property-id", required=True, help="UUID de la propiedad guardada")
    parser.add_argument("--user-id", required=True, help="UUID del usuario")
    parser.add_argument(
        "--no-persist",
        action="store_true",
        help="No guardar el resultado en property_analyses",
    )
    parser.add_argument("--explain", action="store_true", help="Agregar explicación con LLM")
    parser.add_argument("--json", action="store_true", help="Salida en JSON")
    args = parser.parse_args(argv)

    configure_logging(get_settings().log_level)

    try:
        output = run_matching(
            property_id=args.property_id,
            user_id=args.user_id,
            persist=not args.no_persist,
            explain=args.explain,
            as_json=args.json,
        )
        print(output)
        sys.exit(0)

    except (PropertyNotFoundError, PreferencesNotFoundError) as e:
        logger.warning("No se pudo calcular el match", error=str(e))
        sys.exit(2)
    except KeyboardInterrupt:
        logger.info("Matching interrumpido por usuario")
        sys.exit(130)
    except Exception as e:
        logger.error("Error fatal en matching", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
