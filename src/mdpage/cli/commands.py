"""CLI command implementations"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdpage.config import PageOptions, load_config
from mdpage.core.pipeline import build_file
from mdpage.errors import MdPageError


Pairs = Optional[list[str]]
Paths = Optional[list[str]]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _pairs(values: Pairs, option: str) -> Optional[dict[str, str]]:
    """Parse repeated key=value options into an ordered dict; None when the option was not given."""
    if not values:
        return None
    out: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {item!r}", param_hint=option)
        out[key] = value
    return out


def _options(overrides: dict, config: Optional[str]) -> PageOptions:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides, path=config)
    except ValueError as e:
        _fail(str(e))


def _run(path: Path, options: PageOptions, fmt: str) -> str:
    try:
        return asyncio.run(build_file(path, options, fmt))
    except MdPageError as e:
        _fail(str(e))
    except OSError as e:
        _fail(f"Cannot read {path}", e)


def _write(result: str, out: Optional[Path]) -> None:
    if out is None:
        typer.echo(result, nl=False)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(result, encoding="utf-8")
    typer.echo(f"  -> {out}", err=True)


def _collect(**kwargs) -> dict:
    """Build the override dict; boolean flags only count when switched on."""
    overrides = dict(kwargs)
    overrides["meta"] = _pairs(kwargs["meta"], "--meta")
    overrides["equiv"] = _pairs(kwargs["equiv"], "--equiv")
    overrides["html"] = _pairs(kwargs["html"], "--html")
    overrides["body"] = _pairs(kwargs["body"], "--body")
    overrides["attr"] = _pairs(kwargs["attr"], "--attr")
    for name in ("style", "script", "app", "header", "footer"):
        overrides[name] = kwargs[name] or None
    overrides["async"] = overrides.pop("async_") or None
    overrides["markdown"] = kwargs["markdown"] or None
    return overrides


# Options shared by build and events
PathArg = Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Markdown file to wrap")]
OutOpt = Annotated[Optional[Path], typer.Option("--out", "-o", help="Output file (default: stdout)")]
DoctypeOpt = Annotated[Optional[str], typer.Option("--doctype", help="Document type declaration")]
LangOpt = Annotated[Optional[str], typer.Option("--lang", help="Language attribute for the html element")]
CharsetOpt = Annotated[Optional[str], typer.Option("--charset", help="Document character set")]
TitleOpt = Annotated[Optional[str], typer.Option("--title", help="Document title")]
StyleOpt = Annotated[Paths, typer.Option("--style", help="Stylesheet URL (repeatable)")]
ScriptOpt = Annotated[Paths, typer.Option("--script", help="Script URL in head (repeatable)")]
CssOpt = Annotated[Optional[str], typer.Option("--css", help="Inline the contents of a stylesheet file")]
JavascriptOpt = Annotated[Optional[str], typer.Option("--javascript", help="Inline the contents of a script file")]
FaviconOpt = Annotated[Optional[str], typer.Option("--favicon", help="Path for the favicon link")]
MediaOpt = Annotated[Optional[str], typer.Option("--media", help="Media attribute for stylesheets")]
AsyncOpt = Annotated[bool, typer.Option("--async", help="Add async to script elements")]
MetaOpt = Annotated[Pairs, typer.Option("--meta", help="name=content meta element (repeatable)")]
EquivOpt = Annotated[Pairs, typer.Option("--equiv", help="http-equiv=content meta element (repeatable)")]
HtmlOpt = Annotated[Pairs, typer.Option("--html", help="key=value html attribute (repeatable)")]
BodyOpt = Annotated[Pairs, typer.Option("--body", help="key=value body attribute (repeatable)")]
ElementOpt = Annotated[Optional[str], typer.Option("--element", help="Container element name")]
AttrOpt = Annotated[Pairs, typer.Option("--attr", help="key=value container attribute (repeatable)")]
AppOpt = Annotated[Paths, typer.Option("--app", help="Script URL before end of body (repeatable)")]
HeaderOpt = Annotated[Paths, typer.Option("--header", help="Include file at start of body (repeatable)")]
FooterOpt = Annotated[Paths, typer.Option("--footer", help="Include file at end of body (repeatable)")]
MarkdownOpt = Annotated[bool, typer.Option("--markdown", help="Parse header/footer files as markdown")]
ConfigOpt = Annotated[Optional[str], typer.Option("--config", help="Options file (default: mdpage.yaml)")]
VerboseOpt = Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")]


def _page_cmd(fmt: str, path: Path, out: Optional[Path], config: Optional[str], verbose: bool, **options) -> None:
    """Shared body of build and events: load options, wrap path, write the result."""
    _setup_logging(verbose)
    page_options = _options(_collect(**options), config)
    _write(_run(path, page_options, fmt), out)


def build_cmd(
    path: PathArg,
    out: OutOpt = None,
    doctype: DoctypeOpt = None,
    lang: LangOpt = None,
    charset: CharsetOpt = None,
    title: TitleOpt = None,
    style: StyleOpt = None,
    script: ScriptOpt = None,
    css: CssOpt = None,
    javascript: JavascriptOpt = None,
    favicon: FaviconOpt = None,
    media: MediaOpt = None,
    async_: AsyncOpt = False,
    meta: MetaOpt = None,
    equiv: EquivOpt = None,
    html: HtmlOpt = None,
    body: BodyOpt = None,
    element: ElementOpt = None,
    attr: AttrOpt = None,
    app: AppOpt = None,
    header: HeaderOpt = None,
    footer: FooterOpt = None,
    markdown: MarkdownOpt = False,
    config: ConfigOpt = None,
    verbose: VerboseOpt = False,
    ):
    """Wrap a markdown file in a complete HTML page."""
    _page_cmd(
        "html", path, out, config, verbose,
        doctype=doctype, lang=lang, charset=charset, title=title, style=style, script=script,
        css=css, javascript=javascript, favicon=favicon, media=media, async_=async_,
        meta=meta, equiv=equiv, html=html, body=body, element=element, attr=attr,
        app=app, header=header, footer=footer, markdown=markdown,
    )


def events_cmd(
    path: PathArg,
    out: OutOpt = None,
    doctype: DoctypeOpt = None,
    lang: LangOpt = None,
    charset: CharsetOpt = None,
    title: TitleOpt = None,
    style: StyleOpt = None,
    script: ScriptOpt = None,
    css: CssOpt = None,
    javascript: JavascriptOpt = None,
    favicon: FaviconOpt = None,
    media: MediaOpt = None,
    async_: AsyncOpt = False,
    meta: MetaOpt = None,
    equiv: EquivOpt = None,
    html: HtmlOpt = None,
    body: BodyOpt = None,
    element: ElementOpt = None,
    attr: AttrOpt = None,
    app: AppOpt = None,
    header: HeaderOpt = None,
    footer: FooterOpt = None,
    markdown: MarkdownOpt = False,
    config: ConfigOpt = None,
    verbose: VerboseOpt = False,
    ):
    """Print the wrapped event stream as JSON lines, one node per line."""
    _page_cmd(
        "json", path, out, config, verbose,
        doctype=doctype, lang=lang, charset=charset, title=title, style=style, script=script,
        css=css, javascript=javascript, favicon=favicon, media=media, async_=async_,
        meta=meta, equiv=equiv, html=html, body=body, element=element, attr=attr,
        app=app, header=header, footer=footer, markdown=markdown,
    )
