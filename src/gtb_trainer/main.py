"""
GTB Trainer MCP Server
Hint rounds and theme search over the bundled translation corpus, exposed as FastMCP tools.
"""

import json
import logging
import os
from pathlib import Path
from typing import Annotated

from dotenv import load_dotenv
from fastmcp import FastMCP
from pydantic import Field, ValidationError

from .corpus import LANGUAGE_CODES, CorpusError, load_default_corpus
from .generator import DIFFICULTY_LABELS, HintGenerationError, HintGenerator
from .models import RoundState, SearchCondition
from .search import highlight_pattern, paginate, pattern_search, search_translations
from .session import GameSession, SessionError
from .settings import DATA_DIR_ENV_VAR, SETTINGS_FILE, JsonFileStore, TrainerSettings

logger = logging.getLogger("gtb-trainer")

logging.basicConfig(
    level=logging.DEBUG,
    )

if not load_dotenv():
    logger.debug("No .env file found, using environment and defaults.")

data_path = Path(os.getenv(DATA_DIR_ENV_VAR, "")).resolve()
logger.debug(f"📂 Data path: {data_path}")

try:
    corpus = load_default_corpus()
except (CorpusError, FileNotFoundError) as e:
    logger.error(f"❌ Could not load theme corpus: {e}")
    raise

store = JsonFileStore(data_path / SETTINGS_FILE)
session = GameSession(HintGenerator(corpus), TrainerSettings.load(store), store)
logger.debug(f"✅ Loaded {corpus.total_themes} themes, session {session.session_id} ready")

mcp = FastMCP(
    name="gtb-trainer"
)


def _format_round(state: RoundState) -> str:
    lines = [
        f"**Hint:** `{state.hint}` ({state.structure})",
        f"**Found:** {len(state.found_answers)}/{len(state.matched_answers)}",
    ]
    if state.found_answers:
        lines.append("**Answers found:** " + ", ".join(state.found_answers))
    if state.more_hints:
        lines.append("**Hints:**")
        lines.extend(
            f"• {state.current_hint_for(answer)}"
            for answer in state.remaining_answers()
            if answer in state.more_hints
        )
    return "\n".join(lines)


# Hint Round Tools
@mcp.tool
def start_round(
    difficulty: Annotated[int | None, Field(description="1: <=5 letters, 2: 6-8 letters, 3: >=9 letters. Defaults to settings", ge=1, le=3)] = None,
    reveal_count: Annotated[int | None, Field(description="Characters revealed at the start. Defaults to settings", ge=1)] = None,
    language: Annotated[str | None, Field(description="'default' for English themes, or a language code. Defaults to settings")] = None,
) -> str:
    """Start a new hint round and show the masked hint."""
    try:
        state = session.start(difficulty=difficulty, reveal_count=reveal_count, language=language)
    except HintGenerationError as e:
        return f"❌ Could not start round: {e}"

    return (
        f"🎯 New round: {DIFFICULTY_LABELS[state.difficulty]}, {session.time_left}s on the clock\n"
        + _format_round(state)
    )


@mcp.tool
def submit_answer(
    answer: Annotated[str, Field(description="The guessed theme")],
) -> str:
    """Submit a guess for the current round."""
    try:
        result = session.submit_answer(answer)
    except SessionError as e:
        return f"❌ {e}"

    if not answer.strip():
        return "Type an answer first."
    if result.rejected:
        return "❌ Answer is incorrect"
    if result.complete:
        points = session.round.difficulty
        return (
            f"🏆 Congratulations! You earned {points} point{'s' if points > 1 else ''}! "
            f"Total score: {session.score}"
        )
    return f"✅ Answer is correct! Current progress: {result.progress}"


@mcp.tool
def get_more_hint(
    answer: Annotated[str, Field(description="A remaining answer to reveal one more letter of")],
) -> str:
    """Reveal one more letter of a specific remaining answer."""
    try:
        return f"💡 {session.request_hint(answer.lower().strip())}"
    except SessionError as e:
        return f"❌ {e}"


@mcp.tool
def get_all_hints() -> str:
    """Reveal one more letter of every remaining answer."""
    try:
        hints = session.request_all_hints()
    except SessionError as e:
        return f"❌ {e}"
    return "💡 " + "\n".join(f"• {hint}" for hint in hints.values())


@mcp.tool
def show_answers() -> str:
    """Give up and list every answer of the current round."""
    try:
        answers = session.show_answers()
    except SessionError as e:
        return f"❌ {e}"
    found = set(session.round.found_answers)
    return "**Answers:**\n" + "\n".join(
        f"• {answer}{' ✅' if answer in found else ''}" for answer in answers
    )


@mcp.tool
def reset_round() -> str:
    """Abandon the current round. The score is kept."""
    session.reset()
    return f"🔄 Round reset. Score: {session.score}"


@mcp.tool
def round_status() -> str:
    """Show the current round, timer and score."""
    if session.round is None:
        return f"No round in progress. Score: {session.score}"
    return (
        f"**Status:** {session.status} ({session.time_left}s left), score {session.score}\n"
        + _format_round(session.round)
    )


# Theme Search Tools
@mcp.tool
def search_themes(
    query: Annotated[str, Field(description="Theme or translation to look for")],
    exact: Annotated[bool, Field(description="Require an exact match instead of a partial one")] = False,
    page: Annotated[int, Field(description="Result page", ge=1)] = 1,
) -> str:
    """Search themes and their translations."""
    results = paginate(search_translations(corpus, query, exact), page)
    if not results.total_results:
        return f"❌ No themes found for '{query}'."

    lines = [f"**{results.total_results} theme(s)** (page {results.page}/{results.total_pages})"]
    for item in results.items:
        translations = ", ".join(f"{code}: {t.translation}" for code, t in item.translations.items())
        lines.append(f"• {item.theme}" + (f" ({translations})" if translations else ""))
    return "\n".join(lines)


@mcp.tool
def pattern_search_themes(
    conditions: Annotated[str, Field(description="""
        JSON list of conditions, e.g. [{"language": "default", "pattern": "3a4"}, {"language": "de", "pattern": "_a___"}].
        '_' matches any letter, digits expand to that many '_', '-' is a space, a trailing '!' lets '_' match spaces.
        """)],
    page: Annotated[int, Field(description="Result page", ge=1)] = 1,
) -> str:
    """Find themes matching every per-language wildcard pattern."""
    try:
        parsed = [SearchCondition(**c) for c in json.loads(conditions)]
    except (json.JSONDecodeError, TypeError, ValidationError) as e:
        return f"❌ Invalid conditions: {e}"

    results = paginate(pattern_search(corpus, parsed), page)
    if not results.total_results:
        return "❌ No themes match these patterns."

    lines = [f"**{results.total_results} theme(s)** (page {results.page}/{results.total_pages})"]
    for item in results.items:
        matched = []
        for condition in parsed:
            text = item.theme if condition.language == "default" else item.translation_for(condition.language)
            if text and condition.pattern.strip():
                spans = highlight_pattern(text, condition)
                matched.append("".join(
                    f"[{s.text}]" if s.kind == "wildcard" else s.text for s in spans
                ))
        lines.append(f"• {item.theme}: " + " | ".join(matched))
    return "\n".join(lines)


@mcp.tool
def corpus_info() -> str:
    """Show corpus size and last update."""
    return (
        f"📚 {corpus.total_themes} themes, {corpus.total_translations} translations "
        f"(last updated {corpus.last_updated or 'unknown'})\n"
        f"Languages: default, {', '.join(LANGUAGE_CODES)}"
    )


# Settings Tools
@mcp.tool
def get_settings() -> str:
    """Show the trainer settings."""
    settings = session.settings.model_dump(exclude={"custom_shortcuts"})
    return json.dumps(settings, indent=2)


@mcp.tool
def update_settings(
    point: Annotated[int | None, Field(description="Default difficulty (1-3)", ge=1, le=3)] = None,
    hint_length: Annotated[int | None, Field(description="Default characters revealed", ge=1)] = None,
    enable_shortcut: Annotated[bool | None, Field(description="Accept shortcut aliases")] = None,
    language: Annotated[str | None, Field(description="Default round language")] = None,
) -> str:
    """Change the trainer settings. Only provided values are changed."""
    changes = {
        key: value for key, value in {
            "point": point,
            "hint_length": hint_length,
            "enable_shortcut": enable_shortcut,
            "language": language,
        }.items() if value is not None
    }
    if not changes:
        return "Nothing to update."

    try:
        session.update_settings(**changes)
    except ValueError as e:
        return f"❌ Invalid settings: {e}"
    return "⚙️ Settings updated: " + ", ".join(f"{k}={v}" for k, v in changes.items())


@mcp.tool
def get_shortcuts() -> str:
    """Show the custom shortcut text."""
    return session.settings.custom_shortcuts or "No custom shortcuts."


@mcp.tool
def save_shortcuts(
    shortcuts: Annotated[str, Field(description="One 'key = value1, value2' mapping per line, '#' for comments")],
) -> str:
    """Replace the custom shortcuts."""
    session.update_settings(custom_shortcuts=shortcuts)
    return f"✅ Shortcuts saved ({len(session.shortcuts.custom)} custom)"


logger.debug("✅ All tools successfully registered. GTB Trainer server running! 🎯")

def main() -> None:
    """Main entry point for the GTB Trainer MCP Server."""
    mcp.run()

if __name__ == "__main__":
    main()
