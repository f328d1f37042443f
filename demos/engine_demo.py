"""
Watch the move decision engine play Snake
The snake heads for the apple directly while it is short, and falls back to
the long-path search once a naive move could trap it
"""

from game.environment import SnakeGame


def run_games(
    num_games=5,
    render=True,
    fps=60,
    speed_cells=8,
    grid_size=10,
    delay_between_games=2.0,
    show_path_overlay=True,
    max_steps=20000,
    seed=None,
    config=None
):
    """
    Play a number of games with the engine and print a summary

    Args:
        num_games: Number of games to play
        render: If False, run headless as fast as possible
        fps: Frames per second for rendering
        speed_cells: Movement speed in cells per second
        grid_size: Number of cells on both axes
        delay_between_games: Seconds to wait between games (rendered only)
        show_path_overlay: If True, draw the path the search is working on
        max_steps: Safety limit on steps per game
        seed: Seed for apple placement
        config: Optional DeciderConfig

    Returns:
        list of per-game result dicts (score, steps, death_reason, avg_decision_ms)
    """
    game = SnakeGame(
        render=render,
        grid_size=grid_size,
        cell_size=None,
        fps=fps,
        speed_cells=speed_cells,
        seed=seed,
        config=config
    )
    game.show_search_path = show_path_overlay

    print("\n" + "="*60)
    print("Edge Adjacency Engine")
    print("="*60)
    print(f"Number of games: {num_games}")
    print(f"Grid: {grid_size}x{grid_size} | Rendering: {'ON' if render else 'OFF'}")
    if render:
        print("Press P to toggle the search path overlay | Press ESC to exit")
    print("="*60 + "\n")

    results = []
    for index in range(num_games):
        game.reset()
        done = False
        total_time = 0.0

        print(f"Game {index + 1}/{num_games} starting...")

        while not done:
            _, _, done = game.play_tick()
            total_time += game.decision_times[-1]

            if render:
                for _ in range(game.frames_per_move):
                    game.render_frame()

            if game.steps >= max_steps:
                print(f"WARNING: Game exceeded {max_steps} steps. Ending game.")
                done = True

        average_ms = total_time / max(1, game.steps) * 1000
        results.append({
            'score': game.score,
            'steps': game.steps,
            'death_reason': game.death_reason,
            'avg_decision_ms': average_ms,
        })
        outcome = game.death_reason or 'board filled'
        print(f"Game {index + 1} finished | Score: {game.score} | Steps: {game.steps} | "
              f"End: {outcome} | Avg decision: {average_ms:.2f}ms")

        if render:
            for _ in range(int(fps * delay_between_games)):
                game.render_frame()

    scores = [r['score'] for r in results]
    max_possible_score = grid_size * grid_size - 1

    print("\n" + "="*60)
    print("Engine Run Complete!")
    print("="*60)
    print(f"Games Played: {num_games}")
    print(f"Average Score: {sum(scores)/len(scores):.1f} / {max_possible_score}")
    print(f"Best Score: {max(scores)}")
    print(f"Worst Score: {min(scores)}")
    print(f"Average decision time: {sum(r['avg_decision_ms'] for r in results)/len(results):.2f}ms")
    print("="*60 + "\n")

    game.close()
    return results


if __name__ == "__main__":
    run_games(
        num_games=1,
        fps=60,
        speed_cells=20,
        grid_size=10,
        delay_between_games=2.0,
        show_path_overlay=True
    )
