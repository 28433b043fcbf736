"""Command-line interface for incremental-bayes.

Provides ``train``, ``classify``, and ``inspect`` commands with rich
terminal output using the ``click`` and ``rich`` libraries.

Usage::

    incremental-bayes train reviews.jsonl --model model.json
    incremental-bayes train more.jsonl --model model.json --append
    incremental-bayes classify model.json "what a lovely day"
    incremental-bayes inspect model.json

Defaults for ``--smoothing`` and ``--model`` can also come from the
``INCREMENTAL_BAYES_SMOOTHING`` and ``INCREMENTAL_BAYES_MODEL`` environment
variables, optionally set in a ``.env`` file.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .classifier import BayesClassifier, DecodeError
from .models import Document
from .normalizer import Normalizer, english_normalizer, portuguese_normalizer

console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _build_normalizer(language: str, stem: bool, stopwords: bool) -> Normalizer:
    factory = english_normalizer if language == "en" else portuguese_normalizer
    if stopwords:
        return factory(stem=stem)
    return factory(stopwords=(), stem=stem)


def _read_dataset(path: Path, normalizer: Normalizer) -> list[Document]:
    """Read JSON Lines records with ``label`` and ``text`` or ``observation``."""
    documents: list[Document] = []
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            if not line.strip():
                continue
            try:
                record = json.loads(line)
                label = record["label"]
            except (ValueError, KeyError, TypeError) as e:
                raise click.ClickException(f"{path}:{lineno}: invalid record ({e})")

            if "observation" in record:
                observation = list(record["observation"])
            elif "text" in record:
                observation = normalizer.normalize(record["text"])
            else:
                raise click.ClickException(
                    f"{path}:{lineno}: record needs 'text' or 'observation'"
                )
            documents.append(Document(observation=observation, label=label))
    return documents


def _load_model(path: Path) -> BayesClassifier:
    try:
        return BayesClassifier.load(path)
    except (OSError, DecodeError) as e:
        console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)


language_option = click.option(
    "--language", "-l", type=click.Choice(["en", "pt"]), default="en",
    help="Tokenizer and stemmer language.",
)
stem_option = click.option(
    "--stem/--no-stem", default=True, help="Stem tokens before use.",
)
stopwords_option = click.option(
    "--stopwords/--no-stopwords", default=True, help="Drop stop words.",
)


@click.group()
@click.version_option(package_name="incremental-bayes")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def main(verbose: bool) -> None:
    """Incremental Naive Bayes text classifier.

    Train a model from labelled documents, keep adding to it, and rank
    labels for new text.
    """
    load_dotenv()
    _configure_logging(verbose)


@main.command()
@click.argument("dataset", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--model", "-m", "model_path", type=click.Path(dir_okay=False, path_type=Path),
              envvar="INCREMENTAL_BAYES_MODEL", required=True,
              help="Model file to write.")
@click.option("--smoothing", type=click.FloatRange(min=0), default=None,
              envvar="INCREMENTAL_BAYES_SMOOTHING",
              help="Laplace smoothing for new label rows (default 1.0).")
@click.option("--append", is_flag=True,
              help="Continue training an existing model instead of starting over.")
@click.option("--compact", is_flag=True,
              help="Leave the training corpus out of the saved model.")
@language_option
@stem_option
@stopwords_option
def train(
    dataset: Path,
    model_path: Path,
    smoothing: float | None,
    append: bool,
    compact: bool,
    language: str,
    stem: bool,
    stopwords: bool,
) -> None:
    """Train a model from a JSON Lines dataset.

    Each line is an object with a ``label`` and either raw ``text`` or a
    pre-tokenized ``observation`` list.

    Example: incremental-bayes train reviews.jsonl --model model.json
    """
    if append and model_path.exists():
        classifier = _load_model(model_path)
    else:
        classifier = BayesClassifier()

    if smoothing is not None:
        classifier.set("smoothing", smoothing)

    normalizer = _build_normalizer(language, stem, stopwords)
    documents = _read_dataset(dataset, normalizer)
    logger.debug("Read %d document(s) from %s", len(documents), dataset)

    with console.status("[bold blue]Training...", spinner="dots"):
        for document in documents:
            classifier.add_document(document)
        classifier.train()

    classifier.save(model_path, compact=compact)
    console.print(
        f"Trained on [bold]{len(documents)}[/] document(s): "
        f"{classifier.stats.corpus} total, {len(classifier.labels)} label(s), "
        f"{len(classifier.vocabulary)} feature(s)."
    )
    console.print(f"[dim]Model saved to {model_path}[/]")


@main.command()
@click.argument("model_path", metavar="MODEL",
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("text")
@click.option("--top", "-n", type=click.IntRange(min=1), default=None,
              help="Only show the N best labels.")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@language_option
@stem_option
@stopwords_option
def classify(
    model_path: Path,
    text: str,
    top: int | None,
    output: str,
    language: str,
    stem: bool,
    stopwords: bool,
) -> None:
    """Rank labels for a piece of text.

    Use the same --language/--stem/--stopwords settings the model was
    trained with.

    Example: incremental-bayes classify model.json "what a lovely day"
    """
    classifier = _load_model(model_path)
    tokens = _build_normalizer(language, stem, stopwords).normalize(text)
    results = classifier.classify(tokens)
    if top is not None:
        results = results[:top]

    if output == "json":
        click.echo(json.dumps([r.to_dict() for r in results], indent=2))
        return

    if not results:
        console.print("[yellow]Model has no trained labels.[/]")
        return

    table = Table(title="Ranking", show_lines=False)
    table.add_column("#", justify="right", width=4)
    table.add_column("Label", style="cyan")
    table.add_column("Score", justify="right")
    for i, result in enumerate(results, 1):
        table.add_row(str(i), str(result.label), f"{result.score:.6g}")
    console.print(table)


@main.command()
@click.argument("model_path", metavar="MODEL",
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def inspect(model_path: Path, output: str) -> None:
    """Show what a saved model has learned.

    Example: incremental-bayes inspect model.json
    """
    classifier = _load_model(model_path)
    stats = classifier.stats

    if output == "json":
        click.echo(json.dumps({
            "features": len(classifier.vocabulary),
            "smoothing": classifier.get("smoothing"),
            "corpus": len(classifier.corpus),
            "stats": stats.to_dict(),
        }, indent=2))
        return

    console.print(Panel(
        f"Features: {len(classifier.vocabulary)} | "
        f"Smoothing: {classifier.get('smoothing')} | "
        f"Trained documents: {stats.corpus} | "
        f"Stored corpus: {len(classifier.corpus)}",
        title=f"Model: {model_path.name}",
        border_style="blue",
    ))

    table = Table(title="Labels")
    table.add_column("Label", style="cyan")
    table.add_column("Documents", justify="right")
    table.add_column("Prior", justify="right")
    for label, count in sorted(stats.labels.items(), key=lambda x: x[1], reverse=True):
        prior = count / stats.corpus if stats.corpus else 0.0
        table.add_row(str(label), str(count), f"{prior:.1%}")
    console.print(table)


if __name__ == "__main__":
    main()
