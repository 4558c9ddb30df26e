"""Player detail reads and validated edits."""

from __future__ import annotations

import logging

from diamondstats.errors import PlayerNameConflictError, PlayerNotFoundError
from diamondstats.models import PlayerSummary, PlayerUpdate
from diamondstats.persistence import StatsStore


logger = logging.getLogger(__name__)


def get_player_detail(store: StatsStore, player_id: int) -> PlayerSummary:
    with store.session() as repo:
        summary = repo.get_summary(player_id)
    if summary is None:
        raise PlayerNotFoundError(player_id)
    return summary


def update_player(store: StatsStore, player_id: int, update: PlayerUpdate) -> PlayerSummary:
    """Write the new name and, when a statistics row exists, every stat field.

    ``update`` is validated on construction, so nothing here sees out-of-range values.
    """

    with store.transaction() as repo:
        if repo.get_player(player_id) is None:
            raise PlayerNotFoundError(player_id)
        holder = repo.find_player(update.name)
        if holder is not None and holder.id != player_id:
            raise PlayerNameConflictError(update.name)
        repo.update_player(player_id, name=update.name)
        if not repo.update_statistic(player_id, update.stat_line()):
            logger.info("Player %s has no statistics; only the name was updated", player_id)
        summary = repo.get_summary(player_id)
    if summary is None:  # pragma: no cover
        raise PlayerNotFoundError(player_id)
    return summary
