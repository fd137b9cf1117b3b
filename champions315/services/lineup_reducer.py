"""
Lineup state machine for a live match.

Every operation here is a pure function ``op(state, ...) -> LineupState``.
A request that is not valid in the current state is ignored: the very same
state object is returned, so callers can detect a no-op with ``is``. No
operation raises.

Operations other than the goalkeeper-replacement ones are ignored while
``state.gk_phase`` is set.
"""
import math
from dataclasses import replace
from typing import Iterable, Optional, Set

from ..models import (
    GkReplacementPhase, LineupMetrics, LineupPlayers, LineupState,
    PendingSubstitution, Player, SlotGroup, SlotRef, YellowCard
)
from ..utils.constants import AGE_LIMIT, AVG_AGE_LIMIT


def initial_state(players: LineupPlayers, bench: Iterable[Player]) -> LineupState:
    """Seed a session from a starting lineup and bench."""
    return LineupState(players=players, bench=tuple(bench))


# ----------------------------------------------------------------------
# Derived values
# ----------------------------------------------------------------------
def _age_of(player: Optional[Player], reference_year: int) -> int:
    return player.age(reference_year) if player is not None else 0


def compute_metrics(state: LineupState, reference_year: int) -> LineupMetrics:
    """
    Compute the age-rule metrics for the current field.

    The threshold is the age sum until someone is sent off; from then on
    it is the on-field average, for the rest of the match.
    """
    on_field = state.players.on_field()
    total_age = sum(p.age(reference_year) for p in on_field)
    has_expulsions = len(state.ejected) > 0
    average_age = _round_one_decimal(total_age / len(on_field)) if on_field else 0.0
    if has_expulsions:
        below = average_age < AVG_AGE_LIMIT
    else:
        below = total_age < AGE_LIMIT
    return LineupMetrics(
        on_field_players=on_field,
        total_age=total_age,
        average_age=average_age,
        has_expulsions=has_expulsions,
        is_below_threshold=below,
    )


def _round_one_decimal(value: float) -> float:
    # half-up, as the scoreboard shows it
    return math.floor(value * 10 + 0.5) / 10


def selected_player(state: LineupState) -> Optional[Player]:
    """Return the player in the selected slot, if any."""
    if state.selection is None:
        return None
    return state.players.get(state.selection)


def yellow_card_ids(state: LineupState) -> Set[str]:
    return {card.player_id for card in state.yellow_cards}


# ----------------------------------------------------------------------
# Selection
# ----------------------------------------------------------------------
def _slot_ref(group, index) -> Optional[SlotRef]:
    try:
        return SlotRef.of(group, index)
    except (TypeError, ValueError):
        return None


def select_slot(state: LineupState, group, index: int = 0) -> LineupState:
    """Select a field slot. First selection wins; cancel before reselecting."""
    if state.gk_phase is not None or state.selection is not None:
        return state
    ref = _slot_ref(group, index)
    if ref is None or not state.players.contains(ref):
        return state
    return replace(state, selection=ref)


def cancel_selection(state: LineupState) -> LineupState:
    """Clear the selection (and any substitution waiting on it)."""
    if state.selection is None and state.pending_sub is None:
        return state
    return replace(state, selection=None, pending_sub=None)


# ----------------------------------------------------------------------
# Substitutions
# ----------------------------------------------------------------------
def _on_bench(state: LineupState, bench_index) -> bool:
    return isinstance(bench_index, int) and 0 <= bench_index < len(state.bench)


def _swap(state: LineupState, bench_index: int) -> LineupState:
    incoming = state.bench[bench_index]
    outgoing = state.players.get(state.selection)
    bench = list(state.bench)
    del bench[bench_index]
    if outgoing is not None:
        bench.append(outgoing)
    return replace(
        state,
        players=state.players.replace(state.selection, incoming),
        bench=tuple(bench),
        selection=None,
        pending_sub=None,
    )


def substitute(state: LineupState, bench_index: int, reference_year: int) -> LineupState:
    """
    Swap the selected field slot with a bench player.

    A swap that would take the age sum from at-or-above the limit to below
    it is held as ``pending_sub`` until confirmed. The gate does not apply
    once anyone has been sent off.
    """
    if state.gk_phase is not None or state.selection is None or state.pending_sub is not None:
        return state
    if not _on_bench(state, bench_index):
        return state

    metrics = compute_metrics(state, reference_year)
    outgoing = state.players.get(state.selection)
    incoming = state.bench[bench_index]
    projected = (
        metrics.total_age
        - _age_of(outgoing, reference_year)
        + incoming.age(reference_year)
    )

    if projected < AGE_LIMIT and metrics.total_age >= AGE_LIMIT and not metrics.has_expulsions:
        return replace(
            state,
            pending_sub=PendingSubstitution(bench_index=bench_index, projected_total_age=projected),
        )
    return _swap(state, bench_index)


def confirm_pending_substitution(state: LineupState) -> LineupState:
    if state.pending_sub is None or state.selection is None or state.gk_phase is not None:
        return state
    if not _on_bench(state, state.pending_sub.bench_index):
        return state
    return _swap(state, state.pending_sub.bench_index)


def cancel_pending_substitution(state: LineupState) -> LineupState:
    if state.pending_sub is None:
        return state
    return replace(state, pending_sub=None, selection=None)


# ----------------------------------------------------------------------
# Cards
# ----------------------------------------------------------------------
def expel_selected(state: LineupState) -> LineupState:
    """
    Send off the selected player (red card).

    Sending off the goalkeeper starts the goalkeeper-replacement flow.
    """
    if state.gk_phase is not None or state.pending_sub is not None:
        return state
    player = selected_player(state)
    if player is None:
        return state

    ref = state.selection
    gk_phase = GkReplacementPhase.CHOOSE_REPLACEMENT if ref.group is SlotGroup.GK else None
    return replace(
        state,
        players=state.players.remove(ref),
        ejected=state.ejected + (player,),
        selection=None,
        gk_phase=gk_phase,
    )


def give_yellow_card(state: LineupState) -> LineupState:
    """
    Caution the selected player.

    A second yellow for the same player is ignored, but still clears the
    selection.
    """
    if state.gk_phase is not None or state.pending_sub is not None:
        return state
    player = selected_player(state)
    if player is None:
        return state
    if player.id in yellow_card_ids(state):
        return replace(state, selection=None)
    return replace(
        state,
        yellow_cards=state.yellow_cards + (YellowCard.for_player(player),),
        selection=None,
    )


# ----------------------------------------------------------------------
# Goalkeeper replacement
# ----------------------------------------------------------------------
def _outfielder_at(state: LineupState, group, index: int) -> Optional[SlotRef]:
    ref = _slot_ref(group, index)
    if ref is None or not ref.group.is_outfield or state.players.get(ref) is None:
        return None
    return ref


def replace_gk_from_bench(state: LineupState, bench_index: int) -> LineupState:
    """Put a bench player in goal; an outfielder must then leave the field."""
    if state.gk_phase is not GkReplacementPhase.CHOOSE_REPLACEMENT:
        return state
    if not _on_bench(state, bench_index):
        return state
    bench = list(state.bench)
    keeper = bench.pop(bench_index)
    return replace(
        state,
        players=state.players.replace(SlotRef(SlotGroup.GK), keeper),
        bench=tuple(bench),
        gk_phase=GkReplacementPhase.CHOOSE_OUTFIELDER_TO_REMOVE,
    )


def replace_gk_from_field(state: LineupState, group, index: int) -> LineupState:
    """Move an outfielder into goal. Their old slot stays empty."""
    if state.gk_phase is not GkReplacementPhase.CHOOSE_REPLACEMENT:
        return state
    ref = _outfielder_at(state, group, index)
    if ref is None:
        return state
    keeper = state.players.get(ref)
    players = state.players.vacate(ref).replace(SlotRef(SlotGroup.GK), keeper)
    return replace(state, players=players, gk_phase=None)


def remove_outfielder_for_gk_replacement(state: LineupState, group, index: int) -> LineupState:
    """Send an outfielder to the bench to make room for the new goalkeeper."""
    if state.gk_phase is not GkReplacementPhase.CHOOSE_OUTFIELDER_TO_REMOVE:
        return state
    ref = _outfielder_at(state, group, index)
    if ref is None:
        return state
    player = state.players.get(ref)
    return replace(
        state,
        players=state.players.vacate(ref),
        bench=state.bench + (player,),
        gk_phase=None,
    )
