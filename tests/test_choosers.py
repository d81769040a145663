"""
Tests for chooser implementations.
"""

from movie_ranker.choosers.prompt_chooser import PromptChooser
from movie_ranker.choosers.simulated_chooser import SimulatedChooser
from movie_ranker.models import Item, ItemKind


A = Item(item_id="a", title="Alpha")
B = Item(item_id="b", kind=ItemKind.SHOW, title="Beta")


class TestSimulatedChooser:
    """Test SimulatedChooser behavior through public interface."""

    def test_noiseless_chooser_follows_ground_truth(self) -> None:
        chooser = SimulatedChooser({"a": 1.0, "b": 2.0}, noise=0.0)

        assert chooser.choose((A, B)) is B
        assert chooser.choose((B, A)) is B
        assert chooser.choices_made == 2

    def test_ties_go_to_first_item(self) -> None:
        chooser = SimulatedChooser({}, noise=0.0)

        assert chooser.choose((A, B)) is A
        assert chooser.choose((B, A)) is B

    def test_noise_is_clamped(self) -> None:
        chooser = SimulatedChooser({}, noise=5.0)
        assert chooser.noise == 1.0

        chooser.set_noise(-1.0)
        assert chooser.noise == 0.0

    def test_seeded_choices_are_reproducible(self) -> None:
        truth = {"a": 1.0, "b": 1.1}
        first = SimulatedChooser(truth, noise=0.5, seed=11)
        second = SimulatedChooser(truth, noise=0.5, seed=11)

        assert [first.choose((A, B)).item_id for _ in range(20)] == [
            second.choose((A, B)).item_id for _ in range(20)
        ]


class TestPromptChooser:
    """Test PromptChooser with scripted input."""

    def test_reprompts_until_valid_answer(self) -> None:
        # Arrange
        answers = iter(["x", "", " 2 "])
        output: list[str] = []
        chooser = PromptChooser(input_fn=lambda _prompt: next(answers), output_fn=output.append)

        # Act
        chosen = chooser.choose((A, B))

        # Assert
        assert chosen is B
        assert output.count("Please answer 1 or 2") == 2
        assert "  1) Alpha (movie)" in output
        assert "  2) Beta (show)" in output

    def test_shows_scores_when_available(self) -> None:
        output: list[str] = []
        chooser = PromptChooser(
            input_fn=lambda _prompt: "1",
            output_fn=output.append,
            score_of=lambda item: 64 if item.item_id == "a" else 36,
        )

        assert chooser.choose((A, B)) is A
        assert "  1) Alpha (movie) [64]" in output
        assert "  2) Beta (show) [36]" in output
