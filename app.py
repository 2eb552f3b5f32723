"""
Balatro Rules Web App
Streamlit interface for playing a run against the rules engine.
"""

import logging

import pandas as pd
import streamlit as st

from balatro_rules.engine.errors import BalatroError
from balatro_rules.engine.game import Game
from balatro_rules.engine.selection import MAXIMUM_SELECTABLE_CARDS
from balatro_rules.presets import PRESETS, build_properties
from balatro_rules.utils import setup_logger

setup_logger(level=logging.INFO)

# Page config
st.set_page_config(
    page_title="Balatro Rules",
    page_icon="🃏",
    layout="wide"
)

st.title("🃏 Balatro Rules")
st.markdown("*Play poker hands to beat each blind*")

# Sidebar for settings
st.sidebar.header("Settings")

preset_options = list(PRESETS.keys())
selected_preset = st.sidebar.selectbox(
    "Preset",
    options=preset_options,
    format_func=lambda x: PRESETS[x].name
)
st.sidebar.markdown(f"*{PRESETS[selected_preset].description}*")
seed = st.sidebar.text_input("Seed (blank for random)").strip() or None


def new_game():
    game = Game(build_properties(selected_preset, seed=seed), preset_name=selected_preset)
    game.start_run()
    st.session_state.game = game
    st.session_state.deal = 0
    st.session_state.message = None


if st.sidebar.button("🎲 New Run", type="primary", use_container_width=True) \
        or "game" not in st.session_state:
    new_game()

game: Game = st.session_state.game


def run_action(action):
    """Apply an action, report engine errors, and refresh the card checkboxes."""
    try:
        st.session_state.message = action()
    except BalatroError as e:
        st.session_state.message = f"⚠️ {e}"
    st.session_state.deal += 1
    st.rerun()


# Top-level metrics
col1, col2, col3, col4, col5 = st.columns(5)
with col1:
    st.metric("Ante", game.ante)
with col2:
    st.metric("Blind", str(game.blind.boss or game.blind.name))
with col3:
    st.metric("Score", f"{game.score:,} / {game.target_score:,}")
with col4:
    st.metric("Hands / Discards", f"{game.hands_remaining} / {game.discards_remaining}")
with col5:
    st.metric("Money", f"${game.money}")

if game.blind.boss:
    st.caption(f"👹 {game.blind.boss}: {game.blind.boss.description}")

if st.session_state.message:
    st.info(st.session_state.message)

st.divider()

if game.is_over:
    if game.won:
        st.success("🏆 VICTORY!")
    else:
        st.error("💀 DEFEAT")
    st.write(f"Seed: `{game.properties.seed}`")

elif game.round_won:
    st.success(f"✅ Blind beaten! +${game.run.round.reward}")
    if st.button("➡️ Next Round", type="primary"):
        run_action(lambda: game.next_round())

else:
    st.subheader(f"Hand ({game.deck_size} cards left in deck)")
    hand = game.hand
    card_cols = st.columns(len(hand))
    selected = []
    for i, card in enumerate(hand):
        with card_cols[i]:
            if st.checkbox(str(card), key=f"card-{st.session_state.deal}-{i}"):
                selected.append(i)

    if len(selected) > MAXIMUM_SELECTABLE_CARDS:
        st.warning(f"Select at most {MAXIMUM_SELECTABLE_CARDS} cards")
    elif selected:
        game.select_for_play(selected)
        breakdown = game.preview()
        st.code(breakdown.describe())

    def play():
        game.select_for_play(selected)
        breakdown = game.play_hand()
        return f"Played {breakdown.describe()}" if breakdown else None

    def discard():
        game.select_for_discard(selected)
        cards = game.discard_hand()
        return f"Discarded {', '.join(str(c) for c in cards)}" if cards else None

    col1, col2 = st.columns(2)
    with col1:
        if st.button("▶️ Play Hand", use_container_width=True, disabled=not selected):
            run_action(play)
    with col2:
        if st.button("🗑️ Discard", use_container_width=True,
                     disabled=not selected or game.discards_remaining == 0):
            run_action(discard)

# Run timeline
results = game.history.round_results()
if results:
    st.subheader("📜 Run Timeline")
    chart_data = pd.DataFrame([
        {
            "Ante": e.ante,
            "Blind": e.blind,
            "Score": e.data["score"],
            "Required": e.data["required"],
            "Result": "✅" if e.data["success"] else "❌",
        }
        for e in results
    ])
    st.dataframe(chart_data, hide_index=True, use_container_width=True)

    best = game.history.best_hand()
    if best:
        st.caption(f"Best hand: {best.data['hand']} for {best.data['score']:,}")

# Footer
st.divider()
st.markdown("*Built with the balatro_rules engine*")
