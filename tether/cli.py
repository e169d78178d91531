"""
Command-line interface for Tether matching and catalog inspection.
"""

import json
from typing import Optional

import click
from pydantic import ValidationError as PydanticValidationError

from tether.api.models import ClinicalConstraintsSchema, PatientAssessmentSchema
from tether.catalog.resource_catalog import ResourceCatalog
from tether.config import settings
from tether.exceptions import TetherException, ValidationError
from tether.logging_config import setup_logging
from tether.matching.engine import MatchingEngine
from tether.matching.models import ResourceTier
from tether.matching.scoring import (
    WEIGHTS,
    calculate_compatibility_score,
    score_breakdown,
)
from tether.matching.serialization import matches_to_dicts


def _load_json(path: str) -> dict:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _load_record(schema, path: str):
    """Validate a JSON file against a record schema and build the domain record"""
    try:
        return schema.model_validate(_load_json(path)).to_domain()
    except (OSError, json.JSONDecodeError) as e:
        raise ValidationError(f"Could not read {path}: {e}")
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid record in {path}: {e}")


def _load_catalog(catalog_path: Optional[str]) -> ResourceCatalog:
    catalog_path = catalog_path or settings.matching.catalog_path
    if catalog_path:
        return ResourceCatalog.from_json_file(catalog_path)
    return ResourceCatalog()


@click.group()
@click.option('--verbose', is_flag=True, help='Log to stdout')
def cli(verbose):
    """Tether Command Line Interface"""
    if verbose:
        setup_logging()


@cli.command()
@click.option('--constraints', 'constraints_path', required=True,
              type=click.Path(exists=True, dir_okay=False), help='Clinical constraints JSON')
@click.option('--assessment', 'assessment_path', required=True,
              type=click.Path(exists=True, dir_okay=False), help='Patient assessment JSON')
@click.option('--catalog', 'catalog_path', default=None,
              type=click.Path(exists=True, dir_okay=False), help='Resource catalog JSON (seed catalog if omitted)')
@click.option('--limit', default=None, type=click.IntRange(min=1), help='Maximum number of matches')
def match(constraints_path, assessment_path, catalog_path, limit):
    """Match a patient against the resource catalog and print JSON"""
    try:
        constraints = _load_record(ClinicalConstraintsSchema, constraints_path)
        assessment = _load_record(PatientAssessmentSchema, assessment_path)
        engine = MatchingEngine(_load_catalog(catalog_path))
        matches = engine.match(constraints, assessment, limit)
    except TetherException as e:
        raise click.ClickException(e.message)

    click.echo(json.dumps(matches_to_dicts(matches), indent=2))


@cli.command()
@click.argument('resource_id')
@click.option('--assessment', 'assessment_path', required=True,
              type=click.Path(exists=True, dir_okay=False), help='Patient assessment JSON')
@click.option('--catalog', 'catalog_path', default=None,
              type=click.Path(exists=True, dir_okay=False), help='Resource catalog JSON (seed catalog if omitted)')
def explain(resource_id, assessment_path, catalog_path):
    """Show the sub-score breakdown for one resource"""
    try:
        assessment = _load_record(PatientAssessmentSchema, assessment_path)
        catalog = _load_catalog(catalog_path)
    except TetherException as e:
        raise click.ClickException(e.message)

    resource = catalog.get_resource(resource_id)
    if resource is None:
        raise click.ClickException(f"Resource {resource_id} not found")

    click.echo(f"\n{resource.name} ({resource.id})\n")
    for name, value in score_breakdown(resource, assessment).items():
        click.echo(f"  {name:<24} {value:.2f} x {WEIGHTS[name]:.2f}")
    click.echo(f"\n  Compatibility score: {calculate_compatibility_score(resource, assessment)}\n")


@cli.group()
def catalog():
    """Resource catalog commands"""
    pass


@catalog.command('list')
@click.option('--catalog', 'catalog_path', default=None,
              type=click.Path(exists=True, dir_okay=False), help='Resource catalog JSON (seed catalog if omitted)')
@click.option('--tier', type=click.Choice([t.value for t in ResourceTier]), default=None)
def list_resources(catalog_path, tier):
    """List catalog resources"""
    try:
        resource_catalog = _load_catalog(catalog_path)
    except TetherException as e:
        raise click.ClickException(e.message)

    resources = (
        resource_catalog.filter_by_tier(tier) if tier
        else resource_catalog.get_all_resources()
    )

    click.echo(f"\nTotal resources: {len(resources)}\n")
    for resource in resources:
        status = "✓ VERIFIED" if resource.verified else "  UNVERIFIED"
        click.echo(f"{status} {resource.id} ({getattr(resource.tier, 'value', resource.tier)})")
        click.echo(f"         {resource.name}\n")


@cli.command()
def serve():
    """Run the API server"""
    from tether.main import run_api_server

    run_api_server()


if __name__ == '__main__':
    cli()
