"""Deterministic three-paragraph player narratives.

Each classifier is a step function checked from the highest threshold down, so the
first matching tier wins. The generator only reads stats; persisting the text is
done by :func:`generate_description`.
"""

from __future__ import annotations

from diamondstats.errors import PlayerNotFoundError, StatisticsNotFoundError
from diamondstats.models import StatLine
from diamondstats.persistence import StatsStore


def home_run_tier(home_runs: int) -> str:
    if home_runs >= 600:
        return "legendary"
    if home_runs >= 500:
        return "Hall of Fame-caliber"
    if home_runs >= 400:
        return "premier"
    if home_runs >= 300:
        return "standout"
    if home_runs >= 200:
        return "solid"
    return "capable"


def hits_tier(hits: int) -> str:
    if hits >= 3000:
        return "historic"
    if hits >= 2500:
        return "exceptional"
    if hits >= 2000:
        return "accomplished"
    return "productive"


def average_tier(batting_average: float) -> str:
    if batting_average >= 0.320:
        return "places them among the premier contact hitters in history"
    if batting_average >= 0.300:
        return "reflects their elite ability to make contact"
    if batting_average >= 0.280:
        return "demonstrates their solid hitting ability"
    return "shows their contribution to the lineup"


def power_profile(home_runs: int, slugging_percentage: float) -> str:
    if home_runs >= 500 and slugging_percentage >= 0.550:
        return "a transcendent power hitter who changed games with a single swing"
    if home_runs >= 400:
        return "an elite slugger who consistently delivered extra-base power"
    if home_runs >= 300:
        return "a dangerous power threat throughout their career"
    return "a well-rounded offensive player"


def contact_profile(batting_average: float, strikeouts: int, at_bats: int) -> str:
    strikeout_rate = strikeouts / at_bats if at_bats > 0 else 0
    if batting_average >= 0.300 and strikeout_rate < 0.15:
        return "an exceptional contact hitter who rarely struck out"
    if batting_average >= 0.300:
        return "a pure hitter with an exceptional eye at the plate"
    if batting_average >= 0.280:
        return "a reliable hitter who consistently put the ball in play"
    return "a productive offensive contributor"


def speed_profile(stolen_bases: int) -> str:
    if stolen_bases >= 400:
        return "one of the greatest base stealers in history"
    if stolen_bases >= 200:
        return "a significant threat on the basepaths"
    if stolen_bases >= 100:
        return "capable of stealing a base when needed"
    return "not primarily known for speed"


def discipline_profile(walks: int, on_base_percentage: float) -> str:
    if walks >= 1500 and on_base_percentage >= 0.400:
        return "exceptional plate discipline and on-base ability"
    if walks >= 1000:
        return "strong plate discipline and patience"
    if on_base_percentage >= 0.350:
        return "good on-base skills"
    return "offensive production"


def indefinite_article(word: str) -> str:
    return "an" if word[:1].lower() in {"a", "e", "i", "o", "u"} else "a"


def build_description(name: str, stats: StatLine, position_name: str | None = None) -> str:
    """Return three paragraphs separated by blank lines."""

    position = position_name or "position player"
    home_runs = stats.home_runs
    hits = stats.hits
    walks = stats.walks
    stolen_bases = stats.stolen_bases
    avg = stats.batting_average or 0.0
    obp = stats.on_base_percentage or 0.0
    slg = stats.slugging_percentage or 0.0
    ops = stats.on_base_plus_slugging or 0.0

    hr_tier = home_run_tier(home_runs)
    contact = contact_profile(avg, stats.strikeouts, stats.at_bat)

    first = (
        f"{name} established themselves as {indefinite_article(hr_tier)} {hr_tier} "
        f"{position} over a career spanning {stats.games} games. "
    )
    if home_runs >= 500:
        first += (
            f"With {home_runs} career home runs, {name} ranks among the most prolific "
            "power hitters in baseball history. "
        )
    elif home_runs >= 300:
        first += (
            f"Accumulating {home_runs} home runs over their career, {name} demonstrated "
            "elite power at the plate. "
        )
    else:
        first += (
            f"Recording {home_runs} home runs throughout their career, {name} contributed "
            "consistent offensive production. "
        )
    first += (
        f"They drove in {stats.rbi} runs while scoring {stats.runs} times, showcasing "
        "their ability to produce in crucial situations."
    )

    second = f"At the plate, {name} was {contact}. "
    second += f"Their career batting average of {avg:.3f} {average_tier(avg)}. "
    if ops >= 0.900:
        second += f"With an OPS of {ops:.3f}, they ranked among the elite offensive forces of their era. "
    else:
        second += f"They posted an OPS of {ops:.3f}, reflecting their overall offensive contribution. "
    if stolen_bases >= 200:
        second += (
            f"Adding {stolen_bases} stolen bases to their résumé, {name} brought a dynamic "
            "element to the basepaths."
        )
    elif walks >= 1000:
        second += (
            f"Drawing {walks} career walks demonstrated their excellent plate discipline "
            "and ability to work counts."
        )
    else:
        second += (
            f"Their {hits} career hits stand as a testament to their consistency and "
            "longevity in the game."
        )

    third = f"{name}'s career statistics paint the picture of {power_profile(home_runs, slg)}. "
    if hits >= 3000:
        third += (
            "Joining the exclusive 3,000-hit club, they cemented their place among "
            "baseball's all-time greats. "
        )
    elif hits >= 2500:
        third += (
            "With over 2,500 hits, they established themselves as one of the more "
            "productive hitters of their generation. "
        )
    if home_runs >= 600:
        third += (
            "Their membership in the 600 home run club ensures their legacy as one of the "
            "greatest power hitters to ever play the game."
        )
    elif home_runs >= 500:
        third += (
            "Reaching the 500 home run milestone places them in rarified air among "
            "baseball's power elite."
        )
    else:
        third += (
            f"Their combination of {discipline_profile(walks, obp)} made them a valuable "
            "contributor throughout their career."
        )

    return f"{first}\n\n{second}\n\n{third}"


def generate_description(store: StatsStore, player_id: int) -> str:
    """Build the narrative for a stored player and save it as their description."""

    with store.transaction() as repo:
        player = repo.get_player(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        statistic = repo.find_statistic(player_id)
        if statistic is None:
            raise StatisticsNotFoundError(player_id)
        position_name = statistic.position.name if statistic.position else None
        description = build_description(player.name, statistic, position_name)
        repo.update_player(player_id, description=description)
    return description
