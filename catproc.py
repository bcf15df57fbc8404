# catproc.py
# Command-line front end for the Smart Transaction Categorizer.
# - Train on a labelled CSV and save the model snapshot (train)
# - Suggest a category for one description (predict)
# - Score a saved model against a labelled CSV (evaluate)
# - Shuffle, split, train and score in one go (split-eval)
#
# Examples:
#   python catproc.py train data/samples/transactions.csv
#   python catproc.py predict "Coffee at Starbucks" --date 2025-04-18
#   python catproc.py evaluate data/samples/transactions.csv --json
#   python catproc.py split-eval data/samples/transactions.csv --seed 7
#
# Exit codes: 0 ok, 2 empty dataset, 3 model/input file missing.

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import click

from categorizer.evaluation import EvaluationResult
from categorizer.persistence import load_model
from categorizer.service import CategorizerService
from categorizer.settings import load_settings
from config.loader import load_config, resolve_path
from stc_core.models import CategoryCatalog
from stc_utils.datasets import read_categories_csv, read_transactions_csv
from stc_utils.logging_setup import level_from_flags, setup_logging

EXIT_EMPTY = 2
EXIT_MISSING = 3


# ----------------------------- Helpers -----------------------------
def _settings_path(ctx: click.Context, override: Optional[str]) -> Path:
    if override:
        return Path(override)
    return resolve_path(ctx.obj["config"]["paths"]["settings"])


def _model_path(ctx: click.Context, override: Optional[str]) -> Path:
    if override:
        return Path(override)
    return resolve_path(ctx.obj["config"]["paths"]["model"])


def _evaluation_payload(
    result: EvaluationResult, catalog: CategoryCatalog
) -> Dict[str, Any]:
    return {
        "accuracy": result.accuracy,
        "correct": result.correct,
        "total": result.total,
        "per_category": [
            {
                "category_id": cid,
                "name": catalog.get(cid).name if catalog.get(cid) else cid,
                "correct": stats.correct,
                "total": stats.total,
                "accuracy": stats.accuracy,
            }
            for cid, stats in result.per_category.items()
        ],
    }


def _echo_evaluation(
    result: EvaluationResult, catalog: CategoryCatalog, as_json: bool
) -> None:
    if as_json:
        click.echo(json.dumps(_evaluation_payload(result, catalog), ensure_ascii=True))
        return
    click.echo(f"[eval] accuracy={result.accuracy:.2%} ({result.correct}/{result.total})")
    for cid, stats in result.ranked(min_total=1):
        cat = catalog.get(cid)
        click.echo(
            f"  {(cat.name if cat else cid):<24} {stats.accuracy:>7.2%}  ({stats.correct}/{stats.total})"
        )


def _load_or_exit(ctx: click.Context, path: Path, settings: Optional[str]):
    try:
        return load_model(path, load_settings(_settings_path(ctx, settings)))
    except FileNotFoundError as e:
        click.echo(f"[error] {e}", err=True)
        ctx.exit(EXIT_MISSING)


# ----------------------------- CLI -----------------------------
@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to config.toml (default: repo root).",
)
@click.option("--quiet", is_flag=True, help="Suppress info logs; only warnings/errors.")
@click.option("--verbose", is_flag=True, help="Verbose logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], quiet: bool, verbose: bool) -> None:
    """Transaction categorizer CLI."""
    cfg = load_config(Path(config_path) if config_path else None)
    setup_logging(level_from_flags(quiet, verbose, cfg["logging"].get("level")))
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@cli.command("train")
@click.argument("data", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option("--model", "model_out", default=None, help="Where to write the model JSON.")
@click.option(
    "--categories",
    "categories_csv",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    default=None,
    help="Category catalog CSV (id,name,color); overrides the settings catalog.",
)
@click.option("--settings", "settings", default=None, help="Categorizer settings YAML.")
@click.pass_context
def train_cmd(
    ctx: click.Context,
    data: str,
    model_out: Optional[str],
    settings: Optional[str],
    categories_csv: Optional[str],
) -> None:
    """Train on a labelled transactions CSV and save the model."""
    svc = CategorizerService(settings_path=str(_settings_path(ctx, settings)))
    categories = read_categories_csv(categories_csv) if categories_csv else None
    transactions = svc.train_from_csv(data, categories)
    if not svc.model.is_trained:
        click.echo(f"[warn] no usable transactions in {data}", err=True)
        ctx.exit(EXIT_EMPTY)

    out = svc.save(_model_path(ctx, model_out))
    state = svc.model.state
    click.echo(
        f"[ok] trained on {state.training_size}/{len(transactions)} transaction(s), "
        f"{len(state.catalog)} categories, vocabulary={state.vectorizer.vocabulary_size} -> {out}"
    )


@cli.command("predict")
@click.argument("description")
@click.option("--date", "when", default=None, help="Transaction date (e.g. 2025-04-18).")
@click.option("--model", "model_in", default=None, help="Model JSON to load.")
@click.option("--settings", "settings", default=None, help="Categorizer settings YAML.")
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of text.")
@click.pass_context
def predict_cmd(
    ctx: click.Context,
    description: str,
    when: Optional[str],
    model_in: Optional[str],
    settings: Optional[str],
    as_json: bool,
) -> None:
    """Suggest a category for DESCRIPTION."""
    model = _load_or_exit(ctx, _model_path(ctx, model_in), settings)
    pred = model.predict(description, when)
    cat = model.categories.get(pred.category_id)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "category_id": pred.category_id,
                    "name": cat.name if cat else None,
                    "confidence": pred.confidence,
                    "level": pred.confidence_level,
                },
                ensure_ascii=True,
            )
        )
        return
    click.echo(
        f"{pred.category_id} ({cat.name if cat else 'Unknown'}) "
        f"confidence={pred.confidence:.2f} [{pred.confidence_level}]"
    )


@cli.command("evaluate")
@click.argument("data", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option("--model", "model_in", default=None, help="Model JSON to load.")
@click.option("--settings", "settings", default=None, help="Categorizer settings YAML.")
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of text.")
@click.pass_context
def evaluate_cmd(
    ctx: click.Context,
    data: str,
    model_in: Optional[str],
    settings: Optional[str],
    as_json: bool,
) -> None:
    """Score a saved model against a labelled CSV."""
    model = _load_or_exit(ctx, _model_path(ctx, model_in), settings)
    transactions = read_transactions_csv(data)
    if not transactions:
        click.echo(f"[warn] no transactions in {data}", err=True)
        ctx.exit(EXIT_EMPTY)
    _echo_evaluation(model.evaluate(transactions), model.categories, as_json)


@cli.command("split-eval")
@click.argument("data", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option(
    "--test-fraction", default=0.2, show_default=True, help="Share held out for testing."
)
@click.option("--seed", default=None, type=int, help="Shuffle seed for a repeatable split.")
@click.option("--settings", "settings", default=None, help="Categorizer settings YAML.")
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of text.")
@click.pass_context
def split_eval_cmd(
    ctx: click.Context,
    data: str,
    test_fraction: float,
    seed: Optional[int],
    settings: Optional[str],
    as_json: bool,
) -> None:
    """Shuffle DATA, train on one part and score the held-out rest."""
    if not 0 <= test_fraction <= 1:
        raise click.BadParameter("must be within [0, 1]", param_hint="--test-fraction")
    transactions = read_transactions_csv(data)
    if not transactions:
        click.echo(f"[warn] no transactions in {data}", err=True)
        ctx.exit(EXIT_EMPTY)

    svc = CategorizerService(settings_path=str(_settings_path(ctx, settings)))
    result = svc.evaluate_split(transactions, test_fraction=test_fraction, seed=seed)
    _echo_evaluation(result, svc.model.categories, as_json)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
