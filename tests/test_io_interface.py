import pytest

from holecard.blackjack.action import Action
from holecard.common.card import Card, Rank, Suit
from holecard.common.io_interface import (
    ConsoleIOInterface,
    DummyIOInterface,
    TestIOInterface,
)
from holecard.state import GameState, Outcome


def hand(*ranks, showing=True):
    return tuple(Card(Suit.HEARTS, rank, showing=showing) for rank in ranks)


def test_dummy_io_interface_methods():
    interface = DummyIOInterface(unit=25)

    assert interface.output("Test") is None
    assert interface.prompt_bet(500, 100) == 25
    assert interface.prompt_bet(10, 100) == 10
    assert interface.prompt_bet(500, 20) == 20
    assert interface.prompt_continue() is None


def test_dummy_hits_below_seventeen():
    interface = DummyIOInterface()
    choices = (Action.HIT, Action.STAY, Action.EXIT)

    interface.render(GameState(player=hand(Rank.TEN, Rank.SIX)))
    assert interface.prompt_move(choices) == Action.HIT

    interface.render(GameState(player=hand(Rank.TEN, Rank.SEVEN)))
    assert interface.prompt_move(choices) == Action.STAY

    # a soft 17 counts as 17
    interface.render(GameState(player=hand(Rank.ACE, Rank.SIX)))
    assert interface.prompt_move(choices) == Action.STAY


def test_dummy_needs_choices():
    with pytest.raises(ValueError):
        DummyIOInterface().prompt_move(())


def test_test_io_interface_methods():
    interface = TestIOInterface(bets=[10])
    interface.add_bet(20)
    interface.add_move(Action.HIT)
    interface.add_move(Action.STAY)

    interface.output("Test message")
    assert interface.sent_messages == ["Test message"]

    assert interface.prompt_bet(500, 100) == 10
    assert interface.prompt_bet(500, 100) == 20
    with pytest.raises(ValueError):
        interface.prompt_bet(500, 100)

    assert interface.prompt_move((Action.HIT, Action.STAY)) == Action.HIT
    with pytest.raises(ValueError):
        interface.prompt_move((Action.HIT, Action.EXIT))
    assert interface.offered_choices == [
        (Action.HIT, Action.STAY),
        (Action.HIT, Action.EXIT),
    ]
    with pytest.raises(ValueError):
        interface.prompt_move((Action.HIT,))

    interface.prompt_continue()
    assert interface.continues == 1


def test_test_io_interface_records_renders_and_outcomes():
    interface = TestIOInterface()
    state = GameState(
        player=hand(Rank.TEN, Rank.NINE),
        dealer=hand(Rank.KING) + hand(Rank.FIVE, showing=False),
        chips=450,
        current_bet=50,
    )

    interface.render(state)
    interface.announce_outcome(Outcome.PUSH)

    assert interface.rendered_states == [state]
    assert interface.outcomes == [Outcome.PUSH]
    assert "Hidden card." in interface.sent_messages
    assert "five of hearts" not in interface.sent_messages
    assert interface.sent_messages[-1] == "Push!"


class TestConsoleIOInterface:
    def test_output_and_input(self, mocker, capsys):
        interface = ConsoleIOInterface(clear_screen=False)
        mocker.patch("builtins.input", return_value="typed")

        interface.output("Test message")
        assert interface.input("Enter something:") == "typed"

        out = capsys.readouterr().out
        assert "Test message" in out
        assert "Enter something:" in out

    def test_prompt_move_retries(self, mocker, capsys):
        interface = ConsoleIOInterface(clear_screen=False)
        mocker.patch("builtins.input", side_effect=["fold", " Stay "])

        move = interface.prompt_move((Action.HIT, Action.STAY, Action.EXIT))

        assert move == Action.STAY
        out = capsys.readouterr().out
        assert "What is your move? Your choices are hit, stay, and exit." in out
        assert "Hmm, sorry, I didn't get that. Let's try again." in out

    def test_prompt_move_accepts_double_down(self, mocker):
        interface = ConsoleIOInterface(clear_screen=False)
        mocker.patch("builtins.input", return_value="double-down")
        choices = (Action.HIT, Action.STAY, Action.DOUBLE_DOWN, Action.EXIT)
        assert interface.prompt_move(choices) == Action.DOUBLE_DOWN

    def test_prompt_bet_retries_until_valid(self, mocker, capsys):
        interface = ConsoleIOInterface(clear_screen=False)
        mocker.patch("builtins.input", side_effect=["lots", "0", "150", "80", "40"])

        assert interface.prompt_bet(chips=50, bet_limit=100) == 40

        out = capsys.readouterr().out
        assert "Sorry, that input seems to be invalid." in out
        assert "Only positive bets, please." in out
        assert "100 or fewer, please." in out
        assert "Not enough funding for that!" in out

    def test_prompt_continue(self, mocker, capsys):
        interface = ConsoleIOInterface(clear_screen=False)
        mocker.patch("builtins.input", return_value="")
        interface.prompt_continue()
        assert "Please hit enter to proceed." in capsys.readouterr().out

    def test_render_clears_when_asked(self, mocker):
        interface = ConsoleIOInterface(clear_screen=True)
        clear = mocker.patch.object(interface, "clear")
        interface.render(GameState(chips=500))
        clear.assert_called_once()

    def test_render_without_clearing(self, mocker, capsys):
        interface = ConsoleIOInterface(clear_screen=False)
        system = mocker.patch("os.system")
        interface.render(GameState(chips=500))
        system.assert_not_called()
        assert "You have 500 chips left." in capsys.readouterr().out
