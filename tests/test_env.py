import numpy as np

from block_puzzle.env.block_puzzle_env import BlockPuzzleEnv
from block_puzzle.env.wrappers import FlattenDiscreteActionWrapper, ResampleInvalidActionWrapper

from helpers import make_shape


def test_reset_observation_and_mask():
    env = BlockPuzzleEnv()
    obs, info = env.reset(seed=0)
    assert obs["grid"].shape == (8, 8)
    assert not obs["grid"].any()
    assert obs["pieces_remaining"] == 3
    assert (obs["pieces"] >= 0).all()
    assert info["action_mask"].shape == (3, 8, 8)
    assert int(info["action_mask"].sum()) == len(info["valid_actions"])


def test_valid_step_rewards_engine_points():
    env = BlockPuzzleEnv()
    env.reset(seed=0)
    env.game.current_pieces[0] = make_shape("dot")
    obs, reward, terminated, truncated, info = env.step((0, 3, 3))
    assert info["engine_score_delta"] == 10.0
    assert reward > 0
    assert obs["grid"][3, 3] == 1
    assert obs["pieces"][2] == -1
    assert not terminated and not truncated


def test_invalid_step_is_penalized():
    env = BlockPuzzleEnv(invalid_action_penalty=-0.5)
    env.reset(seed=0)
    env.game.current_pieces[0] = make_shape("line5_h")
    _, reward, terminated, _, info = env.step((0, 0, 7))
    assert reward == -0.5
    assert info["engine_score_delta"] == 0.0
    assert not terminated


def test_seeded_reset_is_reproducible():
    env = BlockPuzzleEnv()
    obs_a, _ = env.reset(seed=21)
    obs_b, _ = env.reset(seed=21)
    np.testing.assert_array_equal(obs_a["pieces"], obs_b["pieces"])


def test_rgb_render():
    env = BlockPuzzleEnv(render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (96, 96, 3)
    assert img.dtype == np.uint8


def test_flatten_wrapper_round_trip():
    env = FlattenDiscreteActionWrapper(BlockPuzzleEnv())
    env.reset(seed=0)
    assert env.action_space.n == 3 * 8 * 8
    assert tuple(env.action(1 * 64 + 2 * 8 + 3)) == (1, 2, 3)
    assert env.get_action_mask().shape == (192,)


def test_resample_wrapper_replaces_invalid_action():
    env = ResampleInvalidActionWrapper(FlattenDiscreteActionWrapper(BlockPuzzleEnv()))
    env.reset(seed=0)
    env.unwrapped.game.current_pieces = [make_shape("line5_h") for _ in range(3)]
    mask = env.get_action_mask()
    invalid = int(np.flatnonzero(~mask)[0])
    _, _, _, _, info = env.step(invalid)
    assert "invalid" not in info["reward_components"]
    assert info["engine_score_delta"] == 50.0


def test_only_rgb_array_rendering_is_advertised():
    assert BlockPuzzleEnv.metadata["render_modes"] == ["rgb_array"]
    assert BlockPuzzleEnv().render() is None
