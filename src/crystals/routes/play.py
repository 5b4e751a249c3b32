"""Gameplay routes."""

from xitzin import Redirect, Request, Xitzin
from xitzin.auth import get_identity, require_certificate

from ..engine.commands import GameOutput, Severity
from ..engine.direction import Direction
from ..engine.game import GameEngine
from ..logging import bind_player

# Gemtext has no colours, so severity is shown as a leading marker
_SEVERITY_MARKERS = {
    Severity.NORMAL: "",
    Severity.INFO: "(i) ",
    Severity.WARNING: "(!) ",
    Severity.DANGER: "(!!) ",
    Severity.SUCCESS: "(*) ",
}


def _render_output(output: GameOutput) -> str:
    return _SEVERITY_MARKERS[output.severity] + output.text


def _game(request: Request) -> GameEngine:
    """Look up the requesting player's game, starting one if needed."""
    fingerprint = get_identity(request).fingerprint
    bind_player(fingerprint)
    return request.app.state.games.get_or_create(fingerprint)


def _render_play(app: Xitzin, game: GameEngine, output: GameOutput | None = None):
    """Render the main play view."""
    room = game.describe()
    if output == room:
        output = None
    return app.template(
        "play.gmi",
        room=_render_output(room),
        message=_render_output(output) if output is not None else "",
        directions=[(d.value.lower(), d.name.capitalize()) for d in Direction],
        inventory=game.get_inventory(),
        coins=game.state.player.coins,
        is_game_over=game.is_game_over,
    )


def _register_action_routes(app: Xitzin) -> None:
    """Register command and movement routes."""

    @app.gemini("/play", name="play")
    @require_certificate
    def play(request: Request):
        """Main game view."""
        return _render_play(app, _game(request))

    @app.gemini("/go/{direction}", name="go")
    @require_certificate
    def go(request: Request, direction: str):
        """Movement via clickable link."""
        game = _game(request)
        return _render_play(app, game, game.handle(direction))

    @app.input("/cmd", prompt="What do you want to do?", name="cmd")
    @require_certificate
    def cmd(request: Request, query: str):
        """Freeform command entry."""
        game = _game(request)
        return _render_play(app, game, game.handle(query))


def _register_game_routes(app: Xitzin) -> None:
    """Register game management routes."""

    @app.input(
        "/new",
        prompt="Are you sure you want to start over? Type YES to confirm:",
        name="new_game",
    )
    @require_certificate
    def new_game(request: Request, query: str):
        """Reset game with confirmation."""
        if query.strip().upper() != "YES":
            return Redirect("/play")
        fingerprint = get_identity(request).fingerprint
        bind_player(fingerprint)
        game = request.app.state.games.new_game(fingerprint)
        return _render_play(app, game, game.start())


def register_routes(app: Xitzin) -> None:
    """Register gameplay routes."""
    _register_action_routes(app)
    _register_game_routes(app)
