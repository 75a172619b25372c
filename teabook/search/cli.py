#!/usr/bin/env python3
"""
cli.py
------
Command-line search and analysis of breeding trial datasets.

Commands:
    teabook-search query DATASET TERMS... [options]
    teabook-search facets DATASET [TERMS...]
    teabook-search analyze DATASET --entity growth --value-field height [options]
    teabook-search history show|clear
    teabook-search saved add|list|delete|run

Examples:
    # Simple text search
    teabook-search query data/dataset.yaml yabukita

    # With filters
    teabook-search query data/dataset.yaml mildew category:health severity:high

    # Average height per weather, only tall plants
    teabook-search analyze data/dataset.yaml --entity growth \\
        --value-field height --group-by weather --agg average \\
        --where height:greater_than:10
"""
import json
import click
from pathlib import Path
from typing import Optional, Tuple

from teabook.core.cli import coerce_value, parse_where, setup_logger
from teabook.core.exceptions import DatasetError, StorageError, ValidationError
from teabook.core.logging_manager import TeabookLogger, handle_cli_error
from teabook.core.paths import DB_PATH, LOG_DIR
from teabook.models.enums import AggregationType, SearchCategory, SortField, SortOrder


@click.group()
@click.option("--log-dir", type=click.Path(), default=str(LOG_DIR), help="Directory for log files")
@click.option("--db", "db_path", type=click.Path(), default=str(DB_PATH), help="Search history database")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, log_dir: str, db_path: str, verbose: bool) -> None:
    """
    Search and analyse tea breeding trial records.

    Loads cultivars, growth records and health issues from a YAML dataset
    and runs ranked full-text searches, facet counts or numeric analyses
    over them. Queries are remembered in a small search history.

    Examples:
        teabook-search query data/dataset.yaml yabukita
        teabook-search facets data/dataset.yaml category:health
        teabook-search analyze data/dataset.yaml --entity teas --value-field growth_score
    """
    ctx.ensure_object(dict)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["db_path"] = Path(db_path)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "search", verbose=verbose)


def _open_store(ctx: click.Context):
    from teabook.storage import KeyValueStore

    return KeyValueStore(db_path=ctx.obj["db_path"], logger=ctx.obj["logger"])


def _build_filters(
    terms: Tuple[str, ...],
    category: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
):
    from teabook.search.search_engine import SearchQueryParser

    filters = SearchQueryParser.parse(" ".join(terms))
    if category:
        filters.category = SearchCategory(category)
    if sort:
        filters.sort_by = SortField(sort)
    if order:
        filters.sort_order = SortOrder(order)
    return filters


def _print_results(results, query: str, limit: Optional[int], show_data: bool) -> None:
    from teabook.search.highlight import highlight_text

    shown = results[:limit] if limit else results
    click.echo(f"Found {len(results)} results:\n")

    for result in shown:
        if result.relevance_score > 0:
            click.echo(f"[{result.type.value}] {result.title} (score: {result.relevance_score})")
        else:
            click.echo(f"[{result.type.value}] {result.title}")
        click.echo(f"   {result.description}")

        for fragment in result.highlights:
            marked = highlight_text(fragment.value, query, "[", "]")
            click.echo(f"   {fragment.field}: {marked}")

        if show_data:
            click.echo(f"   {json.dumps(result.data.to_dict(), ensure_ascii=False)}")
        click.echo()

    if limit and len(results) > limit:
        click.echo(f"(Showing first {limit} results. Use --limit to see more)")


@cli.command("query")
@click.argument("dataset", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("terms", nargs=-1)
@click.option("--category", type=click.Choice(SearchCategory.choices()), help="Entity category (default: all)")
@click.option("--sort", type=click.Choice(SortField.choices()), help="Sort field (default: relevance)")
@click.option("--order", type=click.Choice(SortOrder.choices()), help="Sort direction (default: desc)")
@click.option("--limit", type=int, help="Maximum results to display")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.option("--details", is_flag=True, help="Show the full record of each result")
@click.pass_context
def search_query(
    ctx: click.Context,
    dataset: Path,
    terms: Tuple[str, ...],
    category: Optional[str],
    sort: Optional[str],
    order: Optional[str],
    limit: Optional[int],
    as_json: bool,
    details: bool,
) -> None:
    """
    Search cultivars, growth records and health issues.

    Query Syntax:
    - Free text: Any words to search for
    - category:all|teas|growth|health: Restrict the entity type
    - status:STATUS: Cultivar or health issue status
    - location:TEXT: Cultivar location contains TEXT
    - generation:LABEL: Cultivar generation
    - severity:low|medium|high: Health issue severity
    - health:healthy|warning|critical: Health bucket of the issue severity
    - from:YYYY-MM-DD / to:YYYY-MM-DD: Record date range
    - sort:FIELD / order:asc|desc: Result ordering

    Examples:
        teabook-search query data/dataset.yaml yabukita
        teabook-search query data/dataset.yaml aphid category:health from:2024-04-01
    """
    from teabook.models.dataset import load_dataset
    from teabook.search.search_engine import SearchEngine
    from teabook.storage import SearchHistory

    logger: TeabookLogger = ctx.obj["logger"]

    with logger.timed("query", {"dataset": str(dataset)}) as logged:
        try:
            data = load_dataset(dataset, logger)
            filters = _build_filters(terms, category, sort, order)
            results = SearchEngine(logger).search(
                data.cultivars, data.growth_records, data.health_issues, filters
            )
            if filters.text:
                SearchHistory(_open_store(ctx)).add(filters.text)
        except (DatasetError, ValidationError, StorageError) as e:
            handle_cli_error(ctx, e, "query", {"dataset": str(dataset)})
            return
        logged.update({"query": filters.text, "results": len(results)})

    if as_json:
        shown = results[:limit] if limit else results
        click.echo(json.dumps([r.to_dict() for r in shown], ensure_ascii=False, indent=2))
        return

    if not results:
        click.echo("No results found.")
        suggestions = SearchEngine.suggestions(data.cultivars, filters.text)
        if suggestions:
            click.echo(f"Did you mean: {', '.join(suggestions)}")
        return

    _print_results(results, filters.text, limit, details)


@cli.command("facets")
@click.argument("dataset", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("terms", nargs=-1)
@click.pass_context
def search_facets(ctx: click.Context, dataset: Path, terms: Tuple[str, ...]) -> None:
    """
    Show value counts per facet.

    Counts cover the whole dataset for the selected category; values
    matching the active filters are marked with an asterisk.

    Examples:
        teabook-search facets data/dataset.yaml
        teabook-search facets data/dataset.yaml category:teas status:active
    """
    from teabook.models.dataset import load_dataset
    from teabook.search.search_engine import SearchEngine

    logger: TeabookLogger = ctx.obj["logger"]

    try:
        data = load_dataset(dataset, logger)
        filters = _build_filters(terms)
    except (DatasetError, ValidationError) as e:
        handle_cli_error(ctx, e, "facets", {"dataset": str(dataset)})
        return

    facets = SearchEngine(logger).facets(
        data.cultivars, data.growth_records, data.health_issues, filters
    )
    for name, counts in facets.items():
        click.echo(f"{name}:")
        if not counts:
            click.echo("   (none)")
        for facet in counts:
            marker = "*" if facet.selected else " "
            click.echo(f"  {marker} {facet.value}: {facet.count}")


ENTITY_SECTIONS = {
    "teas": "cultivars",
    "growth": "growth_records",
    "health": "health_issues",
}


def _format_number(value) -> str:
    if value is None:
        return "n/a"
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


@cli.command("analyze")
@click.argument("dataset", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--entity", type=click.Choice(list(ENTITY_SECTIONS)), default="teas", show_default=True, help="Records to analyse")
@click.option("--value-field", default="value", show_default=True, help="Numeric field to aggregate")
@click.option("--group-by", help="Field to group by")
@click.option("--agg", "aggregation", type=click.Choice(AggregationType.choices()), default="count", show_default=True, help="Aggregation function")
@click.option("--where", "where", multiple=True, help="Filter as FIELD:OPERATOR:VALUE (repeatable)")
@click.option("--sort-by", default="value", show_default=True, help="Row field to sort on")
@click.option("--order", type=click.Choice(SortOrder.choices()), default="desc", show_default=True)
@click.option("--limit", type=int, help="Maximum rows")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def analyze_command(
    ctx: click.Context,
    dataset: Path,
    entity: str,
    value_field: str,
    group_by: Optional[str],
    aggregation: str,
    where: Tuple[str, ...],
    sort_by: str,
    order: str,
    limit: Optional[int],
    as_json: bool,
) -> None:
    """
    Filter and aggregate a numeric field.

    Operators: equals, not_equals, contains, not_contains, starts_with,
    ends_with, greater_than, less_than, between (VALUE is "min,max"),
    in, not_in (VALUE is "a,b,c").

    Examples:
        teabook-search analyze data/dataset.yaml --value-field germination_rate --agg average
        teabook-search analyze data/dataset.yaml --entity growth --value-field height \\
            --group-by weather --agg median --where leaf_count:greater_than:4
    """
    from teabook.analysis import AnalysisConfig, FilterCondition, analyze
    from teabook.analysis.filters import get_field
    from teabook.models.dataset import load_dataset

    logger: TeabookLogger = ctx.obj["logger"]

    with logger.timed("analyze", {"dataset": str(dataset), "entity": entity}) as logged:
        try:
            data = load_dataset(dataset, logger)
            items = [record.to_dict() for record in getattr(data, ENTITY_SECTIONS[entity])]
            conditions = []
            for option in where:
                field_name, operator, value = parse_where(option)
                field_values = [get_field(item, field_name) for item in items]
                conditions.append(
                    FilterCondition(
                        field=field_name,
                        operator=operator,
                        value=coerce_value(value, field_values),
                    )
                )
            config = AnalysisConfig(
                aggregation_type=aggregation,
                group_by=group_by,
                sort_by=sort_by,
                sort_order=order,
                limit=limit,
                value_field=value_field,
            )
        except (DatasetError, ValidationError) as e:
            handle_cli_error(ctx, e, "analyze", {"dataset": str(dataset)})
            return

        result = analyze(items, config, conditions=conditions, logger=logger)
        logged["rows"] = len(result.data)

    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    for condition in conditions:
        click.echo(f"Filter: {condition.label}")

    click.echo(f"Rows ({len(result.data)}):")
    for row in result.data:
        cells = ", ".join(f"{key}={_format_number(value)}" for key, value in row.items())
        click.echo(f"   {cells}")

    summary = result.summary
    click.echo("\nSummary:")
    click.echo(f"   total: {summary.total}")
    for label in ("average", "min", "max", "median", "standard_deviation"):
        click.echo(f"   {label}: {_format_number(getattr(summary, label))}")

    click.echo("\nInsights:")
    for insight in result.insights:
        click.echo(f"   • {insight}")


@cli.group("history")
@click.pass_context
def history_group(ctx: click.Context) -> None:
    """
    Inspect or clear the search history.

    Every non-empty query text run through 'query' is remembered, most
    recent first, up to 20 entries.
    """
    pass


@history_group.command("show")
@click.pass_context
def history_show(ctx: click.Context) -> None:
    """Show past queries, most recent first."""
    from teabook.storage import SearchHistory

    try:
        entries = SearchHistory(_open_store(ctx)).entries()
    except StorageError as e:
        handle_cli_error(ctx, e, "history_show")
        return

    if not entries:
        click.echo("Search history is empty.")
        return
    for index, entry in enumerate(entries, 1):
        click.echo(f"{index:>3}. {entry}")


@history_group.command("clear")
@click.pass_context
def history_clear(ctx: click.Context) -> None:
    """Forget every past query."""
    from teabook.storage import SearchHistory

    try:
        SearchHistory(_open_store(ctx)).clear()
    except StorageError as e:
        handle_cli_error(ctx, e, "history_clear")
        return
    click.echo("✓ Search history cleared")


@cli.group("saved")
@click.pass_context
def saved_group(ctx: click.Context) -> None:
    """
    Manage saved searches.

    A saved search stores the parsed filters of a query string under a
    name so it can be re-run against any dataset.
    """
    pass


@saved_group.command("add")
@click.argument("name")
@click.argument("terms", nargs=-1)
@click.pass_context
def saved_add(ctx: click.Context, name: str, terms: Tuple[str, ...]) -> None:
    """Save a query under NAME."""
    from teabook.storage import SavedSearches

    try:
        saved = SavedSearches(_open_store(ctx)).save(name, _build_filters(terms))
    except (ValidationError, StorageError) as e:
        handle_cli_error(ctx, e, "saved_add", {"name": name})
        return
    click.echo(f"✓ Saved search '{saved.name}' ({saved.id})")


@saved_group.command("list")
@click.pass_context
def saved_list(ctx: click.Context) -> None:
    """List saved searches."""
    from teabook.storage import SavedSearches

    try:
        searches = SavedSearches(_open_store(ctx)).list()
    except StorageError as e:
        handle_cli_error(ctx, e, "saved_list")
        return

    if not searches:
        click.echo("No saved searches.")
        return
    for saved in searches:
        query = saved.filters.text or "(no text)"
        click.echo(f"{saved.id}  {saved.name}: {query} [{saved.filters.category.value}]")


@saved_group.command("delete")
@click.argument("search_id")
@click.pass_context
def saved_delete(ctx: click.Context, search_id: str) -> None:
    """Delete the saved search SEARCH_ID."""
    from teabook.storage import SavedSearches

    try:
        deleted = SavedSearches(_open_store(ctx)).delete(search_id)
    except StorageError as e:
        handle_cli_error(ctx, e, "saved_delete", {"id": search_id})
        return

    if deleted:
        click.echo(f"✓ Deleted saved search {search_id}")
    else:
        click.echo(f"⚠ No saved search with id {search_id}")


@saved_group.command("run")
@click.argument("search_id")
@click.argument("dataset", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--limit", type=int, help="Maximum results to display")
@click.pass_context
def saved_run(ctx: click.Context, search_id: str, dataset: Path, limit: Optional[int]) -> None:
    """Run the saved search SEARCH_ID against DATASET."""
    from teabook.models.dataset import load_dataset
    from teabook.search.search_engine import SearchEngine
    from teabook.storage import SavedSearches

    logger: TeabookLogger = ctx.obj["logger"]

    try:
        saved = SavedSearches(_open_store(ctx)).get(search_id)
        if saved is None:
            raise ValidationError(f"No saved search with id {search_id}")
        data = load_dataset(dataset, logger)
    except (DatasetError, ValidationError, StorageError) as e:
        handle_cli_error(ctx, e, "saved_run", {"id": search_id, "dataset": str(dataset)})
        return

    results = SearchEngine(logger).search(
        data.cultivars, data.growth_records, data.health_issues, saved.filters
    )
    if not results:
        click.echo("No results found.")
        return
    _print_results(results, saved.filters.text, limit, False)


if __name__ == "__main__":
    cli(obj={})
