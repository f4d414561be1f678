"""
Simple simulation script: computer players against each other over the API.
"""

import requests
import random
import sys

from app.core.game_config import DEFAULT_PLAYER1_SYMBOL, DEFAULT_PLAYER2_SYMBOL, win_lengths_for
from app.models.outcome import GameOutcome, OutcomeStatus
from app.services.scoreboard import JsonFileStore, ScoreBoard


def main():
    BASE_URL = "http://localhost:8000/api/v1"
    NUM_GAMES = 20
    STORE_PATH = "simulation_scores.json"

    print("=== Grid Game Simulation ===\n")

    scoreboard = ScoreBoard(JsonFileStore(STORE_PATH))
    players = scoreboard.players()
    marks = {"player1": DEFAULT_PLAYER1_SYMBOL, "player2": DEFAULT_PLAYER2_SYMBOL}
    for key, mark in marks.items():
        if players[key].symbol != mark:
            print(f"X {key} uses '{players[key].symbol}' in {STORE_PATH}, expected '{mark}'")
            sys.exit(1)

    response = requests.get(f"{BASE_URL}/config")
    if response.status_code != 200:
        print(f"X Server not reachable: {response.text}")
        sys.exit(1)
    config = response.json()

    print(f"\nPlaying {NUM_GAMES} games...")
    stats = {key: {"wins": 0, "losses": 0, "draws": 0} for key in marks}

    for game_num in range(NUM_GAMES):
        grid_size = random.choice([3, 4, 5])
        win_length = random.choice(win_lengths_for(grid_size))
        choices = config["difficulties"]
        difficulties = {key: random.choice(choices) for key in marks}

        current, other = random.sample(list(marks), 2)
        board = [[None for _ in range(grid_size)] for _ in range(grid_size)]
        outcome = None

        while outcome is None or outcome["status"] == OutcomeStatus.IN_PROGRESS.value:
            response = requests.post(
                f"{BASE_URL}/engine/move",
                json={
                    "board": board,
                    "mover_mark": marks[current],
                    "opponent_mark": marks[other],
                    "grid_size": grid_size,
                    "win_length": win_length,
                    "difficulty": difficulties[current],
                }
            )
            if response.status_code != 200:
                print(f"Move request failed: {response.text}")
                break

            move = response.json()["move"]
            if move is None:
                break

            row, col = move
            response = requests.post(
                f"{BASE_URL}/games/turn",
                json={
                    "board": board,
                    "win_length": win_length,
                    "row": row,
                    "col": col,
                    "mark": marks[current],
                    "opponent_mark": marks[other],
                }
            )
            if response.status_code != 200:
                print(f"Move failed: {response.text}")
                break

            result = response.json()
            board = result["board"]
            outcome = result["outcome"]
            current, other = other, current

        if outcome is None or outcome["status"] == OutcomeStatus.IN_PROGRESS.value:
            continue

        label = (f"Game {game_num + 1} ({grid_size}x{grid_size}, {win_length} in a row, "
                 f"{difficulties['player1']} vs {difficulties['player2']})")
        if outcome["status"] == OutcomeStatus.WIN.value:
            winner_key = "player1" if outcome["winner"] == marks["player1"] else "player2"
            loser_key = "player2" if winner_key == "player1" else "player1"
            stats[winner_key]["wins"] += 1
            stats[loser_key]["losses"] += 1
            scoreboard.record_outcome(GameOutcome.win(outcome["winner"], []))
            print(f"  {label}: {winner_key} won")
        else:
            stats["player1"]["draws"] += 1
            stats["player2"]["draws"] += 1
            scoreboard.record_outcome(GameOutcome.draw())
            print(f"  {label}: Draw")

    # Display results
    print("\n=== Results ===\n")

    print("This run:")
    for key, player_stats in stats.items():
        total = player_stats["wins"] + player_stats["losses"] + player_stats["draws"]
        win_rate = (player_stats["wins"] / total * 100) if total > 0 else 0
        print(f"  {key} ({marks[key]}):")
        print(f"     Wins: {player_stats['wins']}")
        print(f"     Losses: {player_stats['losses']}")
        print(f"     Draws: {player_stats['draws']}")
        print(f"     Win Rate: {win_rate:.1f}%")

    print(f"\nAll time ({STORE_PATH}):")
    for key, profile in scoreboard.players().items():
        print(f"  {profile.name} ({profile.symbol}): {profile.score} wins in {profile.games} games")

    print("\n Simulation complete!")


if __name__ == "__main__":
    main()
