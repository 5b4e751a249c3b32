"""Pages that need no certificate: the landing page, rules and about."""

from xitzin import Request, Xitzin

from ..engine.commands import FOOD_STEPS, MONSTER_ATTACK_DELAY, WOUND_PERCENT
from ..engine.state import STEPS_PER_ROOM

# Rule numbers shown on /help, taken from the engine so the page cannot drift
_RULES = {
    "food_steps": FOOD_STEPS,
    "attack_delay": int(MONSTER_ATTACK_DELAY),
    "wound_percent": WOUND_PERCENT,
    "steps_per_room": STEPS_PER_ROOM,
}


def register_routes(app: Xitzin) -> None:
    config = app.state.config
    games = app.state.games

    @app.gemini("/", name="home")
    def home(request: Request):
        return app.template("home.gmi", players=len(games))

    @app.gemini("/help", name="help")
    def help_page(request: Request):
        return app.template("help.gmi", **_RULES)

    @app.gemini("/about", name="about")
    def about(request: Request):
        return app.template(
            "about.gmi",
            room_count=config.room_count,
            max_games=config.max_games,
        )
