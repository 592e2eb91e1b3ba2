"""
Smaak - CLI Entry Point.

Usage:
    smaak analyze chicken lemon basil        Analyze a composition
    smaak analyze chicken -m chicken=Roast   ... with cooking methods
    smaak search pars                        Search the catalog
    smaak ingredients --category Herbs       List ingredients
    smaak methods [INGREDIENT]               List cooking methods
    smaak guidance potato --method Roast     Preparation notes
    smaak health                             Check configuration
    smaak serve                              Start the web API
"""

from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from smaak.models import CompositionAnalysis

app = typer.Typer(
    name="smaak",
    help="Smaak - Ingredient composition analysis.",
    add_completion=False,
)
console = Console()

PRIORITY_STYLES = {"high": "red", "medium": "yellow", "low": "dim"}


def _parse_methods(pairs: list[str] | None) -> dict[str, str]:
    """Parse "ingredient=method" pairs."""
    methods: dict[str, str] = {}
    for pair in pairs or []:
        if "=" not in pair:
            console.print(f"[red]Invalid cooking method {pair!r}, expected ingredient=method[/red]")
            raise typer.Exit(1)
        name, method = pair.split("=", 1)
        methods[name.strip()] = method.strip()
    return methods


def _score_style(score: int) -> str:
    if score >= 75:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"


def _show_analysis(analysis: CompositionAnalysis) -> None:
    score = analysis.overall_score
    carrier = analysis.carrier.name if analysis.carrier else "none"
    balance = "balanced" if analysis.is_balanced else "unbalanced"
    console.print(
        Panel.fit(
            f"[bold {_score_style(score)}]{score}/100[/bold {_score_style(score)}]\n"
            f"Carrier: [bold]{carrier}[/bold]\n"
            f"Flavor: {balance}, dominant {analysis.flavor_profile.dominant_taste}\n"
            f"Sensory: {analysis.sensory_profile.description}\n"
            f"Balance: {analysis.sensory_balance.description}",
            title="Composition",
            border_style="green",
        )
    )

    table = Table(title="Ingredients", show_header=True)
    table.add_column("Ingredient")
    table.add_column("Role")
    table.add_column("Method")
    table.add_column("Textures")
    for ingredient in analysis.ingredients:
        table.add_row(
            ingredient.name,
            ingredient.role.value,
            analysis.cooking_methods.get(ingredient.id, "-"),
            ", ".join(t.value for t in ingredient.textures) or "-",
        )
    console.print(table)

    if analysis.unknown_ingredients:
        console.print(f"[yellow]Ignored unknown:[/yellow] {', '.join(analysis.unknown_ingredients)}")

    if analysis.missing_elements:
        console.print("\n[bold]Missing[/bold]")
        for missing in analysis.missing_elements:
            style = PRIORITY_STYLES[missing.priority.value]
            console.print(f"  [{style}]{missing.priority.value:<6}[/{style}] {missing.type.value}: {missing.reason}")
    else:
        console.print("\n[green]Nothing missing[/green]")

    for hint in analysis.sensory_balance.suggestions:
        console.print(f"[dim]Hint:[/dim] {hint}")

    if analysis.suggestions:
        table = Table(title="Suggestions", show_header=True)
        table.add_column("Ingredient")
        table.add_column("For")
        table.add_column("Why")
        table.add_column("Cook as")
        for suggestion in analysis.suggestions:
            table.add_row(
                suggestion.ingredient.name,
                suggestion.missing_element.value,
                suggestion.reason,
                suggestion.optimal_cooking_method or "-",
            )
        console.print(table)


@app.command()
def analyze(
    ingredients: list[str] = typer.Argument(..., help="Ingredient names"),
    method: Optional[list[str]] = typer.Option(None, "--method", "-m", help="Cooking method as ingredient=method"),
    strict: bool = typer.Option(False, "--strict", help="Fail on unknown ingredients or methods"),
    as_json: bool = typer.Option(False, "--json", help="Print the analysis as JSON"),
) -> None:
    """Analyze an ingredient composition."""
    from smaak.analysis import CompositionError, CompositionAnalyzer

    methods = _parse_methods(method)
    try:
        analysis = CompositionAnalyzer().analyze_composition(ingredients, methods, strict=strict or None)
    except CompositionError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(analysis.model_dump_json())
        return
    _show_analysis(analysis)


@app.command()
def search(
    query: str = typer.Argument(..., help="Search text"),
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum results"),
) -> None:
    """Search ingredients by name, Dutch name or alias."""
    from smaak.catalog import get_catalog

    results = get_catalog().search(query, limit=limit)
    if not results:
        console.print(f"[dim]No ingredients match {query!r}[/dim]")
        return

    table = Table(show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Dutch")
    table.add_column("Category")
    for ingredient in results:
        table.add_row(ingredient.id, ingredient.name, ingredient.name_nl or "-", ingredient.category or "-")
    console.print(table)


@app.command()
def ingredients(
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Only this category"),
) -> None:
    """List catalog ingredients by category."""
    from smaak.catalog import get_catalog

    grouped = get_catalog().ingredients_by_category()
    if category:
        grouped = {k: v for k, v in grouped.items() if k.lower() == category.lower()}
        if not grouped:
            console.print(f"[red]Unknown category: {category}[/red]")
            raise typer.Exit(1)

    for name, items in grouped.items():
        console.print(f"\n[bold]{name}[/bold] ({len(items)})")
        for ingredient in items:
            flags = [
                label for label, on in (
                    ("carrier", ingredient.can_be_carrier),
                    ("umami", ingredient.provides_umami),
                    ("acid", ingredient.provides_acidity),
                    ("crunch", ingredient.provides_crunch),
                )
                if on
            ]
            suffix = f" [dim]({', '.join(flags)})[/dim]" if flags else ""
            console.print(f"  {ingredient.name}{suffix}")


@app.command()
def methods(
    ingredient: Optional[str] = typer.Argument(None, help="Show methods with known effects on this ingredient"),
) -> None:
    """List cooking methods."""
    from smaak.catalog import get_catalog

    catalog = get_catalog()
    if ingredient is None:
        items = catalog.cooking_methods()
        title = "Cooking methods"
    else:
        match = catalog.lookup(ingredient)
        if match is None:
            console.print(f"[red]Unknown ingredient: {ingredient}[/red]")
            raise typer.Exit(1)
        items = catalog.cooking_methods_for(match.ingredient.id)
        title = f"Cooking methods for {match.ingredient.name}"
        optimal = catalog.optimal_cooking_method(match.ingredient.id)
        if optimal:
            console.print(f"Optimal: [bold]{optimal.name}[/bold]")

    table = Table(title=title, show_header=True)
    table.add_column("Method")
    table.add_column("Dutch")
    table.add_column("Heat")
    table.add_column("Temperature")
    for method in items:
        if method.temperature_range_min is not None and method.temperature_range_max is not None:
            temperature = f"{method.temperature_range_min}-{method.temperature_range_max}°C"
        else:
            temperature = "-"
        table.add_row(method.name, method.name_nl or "-", method.heat_type or "-", temperature)
    console.print(table)


@app.command()
def guidance(
    ingredient: str = typer.Argument(..., help="Ingredient name"),
    method: str = typer.Option("Raw", "--method", "-m", help="Cooking method"),
) -> None:
    """Show preparation guidance for an ingredient."""
    from smaak.catalog import get_catalog
    from smaak.cooking import cooking_guidance

    catalog = get_catalog()
    match = catalog.lookup(ingredient)
    if match is None:
        console.print(f"[red]Unknown ingredient: {ingredient}[/red]")
        raise typer.Exit(1)
    if catalog.cooking_method(method) is None:
        console.print(f"[red]Unknown cooking method: {method}[/red]")
        raise typer.Exit(1)

    console.print(cooking_guidance(match.ingredient, method, catalog))


@app.command()
def health() -> None:
    """Check configuration and catalog."""
    from smaak.catalog import get_catalog
    from smaak.config import get_settings

    console.print("\n[bold]Smaak Health Check[/bold]\n")

    try:
        settings = get_settings()
        console.print("[green]OK[/green] Configuration loaded")
        console.print(f"   Environment: {settings.smaak_env}")
        console.print(f"   Log level: {settings.log_level}")
        console.print(f"   Catalog source: {settings.smaak_catalog_source}")

        if settings.smaak_catalog_source == "supabase":
            if settings.supabase_url and settings.supabase_url.startswith("https://"):
                console.print("[green]OK[/green] Supabase URL configured")
            else:
                console.print("[red]FAIL[/red] Supabase URL missing or invalid")
                raise typer.Exit(1)

        catalog = get_catalog()
        console.print(
            f"[green]OK[/green] Catalog loaded: {len(catalog)} ingredients, "
            f"{len(catalog.cooking_methods())} cooking methods"
        )

        console.print("\n[green]All checks passed![/green]")

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"\n[red]FAIL Configuration error: {e}[/red]")
        console.print("[dim]Check your .env file and catalog settings.[/dim]")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    from smaak import __version__

    console.print(f"Smaak version {__version__}")


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload for development"),
) -> None:
    """Start the web API server."""
    import os

    import uvicorn

    actual_port = int(os.environ.get("PORT", port))

    console.print("\n[bold green]Smaak API[/bold green]")
    console.print(f"Starting server on http://localhost:{actual_port}")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "smaak.web.app:app",
        host="0.0.0.0",
        port=actual_port,
        reload=reload,
    )


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
