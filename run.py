import asyncio
import json
import os
from pathlib import Path
from typing import Optional

import typer
import yaml

from assessment.commons.errors import AssessmentError
from assessment.commons.logger import setup_logging
from assessment.commons.types import Settings
from assessment.helpers.http_transport import ApiTransport
from assessment.helpers.report import render_patient_analysis, render_summary
from assessment.services.analysis_service import RiskAnalyzer
from assessment.services.assessment_service import AssessmentService

app = typer.Typer(add_completion=False, help="Patient Risk Assessment")

DEFAULT_CONFIG = Path(__file__).parent / "assessment" / "configs" / "settings.yaml"


def load_cfg(path: Optional[str] = None) -> Settings:
    config_path = Path(path) if path else DEFAULT_CONFIG
    with open(config_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return Settings.model_validate(raw)


def _bootstrap(config: Optional[str], require_key: bool = True) -> Settings:
    settings = load_cfg(config)
    logger = setup_logging(settings.logging)
    settings.api_key = os.getenv(settings.api.api_key_env) or None
    if require_key and not settings.api_key:
        logger.error(
            f"{settings.api.api_key_env} environment variable is required. "
            f"Please set {settings.api.api_key_env}=your_key_here"
        )
        raise typer.Exit(code=1)
    return settings


@app.command()
def assess(
    dry_run: bool = typer.Option(False, help="Analiza sin enviar resultados"),
    config: Optional[str] = typer.Option(None, help="Ruta a settings.yaml"),
):
    """Descarga todos los pacientes, los clasifica y envia el resultado."""
    settings = _bootstrap(config)

    async def _amain():
        async with ApiTransport(settings) as transport:
            return await AssessmentService(transport).run(dry_run=dry_run)

    try:
        asyncio.run(_amain())
    except AssessmentError:
        raise typer.Exit(code=1)


@app.command()
def patient(
    patient_id: str = typer.Argument(..., help="patient_id a inspeccionar"),
    config: Optional[str] = typer.Option(None, help="Ruta a settings.yaml"),
):
    """Muestra el desglose de riesgo de un paciente."""
    settings = _bootstrap(config)

    async def _amain():
        async with ApiTransport(settings) as transport:
            service = AssessmentService(transport)
            service.analyze_patients(await service.fetch_all_patients())
            return service.analyzer.get_patient_analysis(patient_id)

    try:
        analysis = asyncio.run(_amain())
    except AssessmentError:
        raise typer.Exit(code=1)
    if analysis is None:
        typer.echo(f"Patient {patient_id} not found", err=True)
        raise typer.Exit(code=1)
    render_patient_analysis(analysis)


@app.command("analyze-file")
def analyze_file(
    path: str = typer.Argument(..., help="JSON con lista de pacientes o pagina con 'data'"),
    config: Optional[str] = typer.Option(None, help="Ruta a settings.yaml"),
):
    """Clasifica pacientes desde un archivo local, sin red."""
    _bootstrap(config, require_key=False)
    body = json.loads(Path(path).read_text(encoding="utf-8"))
    patients = body.get("data", []) if isinstance(body, dict) else body

    analyzer = RiskAnalyzer()
    analyzer.add_patients(patients)
    results = analyzer.analyze()
    render_summary(analyzer.get_summary())
    typer.echo(json.dumps(results.as_dict(), indent=2))


if __name__ == "__main__":
    app()
