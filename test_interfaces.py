from checkers import (
    AlphaBetaSearchStrategy,
    Board,
    HeuristicEvaluator,
    Player,
    SearchEngine,
    evaluate,
    get_evaluator,
    get_search_strategy,
    initial_board,
)


def test_evaluator_adapter_matches_impl():
    board = initial_board()
    board.move(5, 2, 4, 3)
    adapter = HeuristicEvaluator()
    assert adapter.evaluate_position(board, Player.BLACK) == evaluate(board, Player.BLACK)


def test_search_strategy_returns_move():
    strat = AlphaBetaSearchStrategy()
    result = strat.search(initial_board(), Player.RED, depth=2)
    assert result is not None
    assert isinstance(result.score, int)
    assert result.from_row == 2


def test_strategy_uses_injected_engine():
    engine = SearchEngine(evaluator=get_evaluator())
    strat = AlphaBetaSearchStrategy(engine)
    assert strat.engine is engine
    assert strat.search(Board(), Player.RED, 2) == engine.search(Board(), Player.RED, 2)


def test_factories_work():
    evaluator = get_evaluator()
    board = initial_board()
    assert evaluator.evaluate_position(board, Player.RED) == 0

    strat = get_search_strategy()
    result = strat.search(board, Player.RED, 2)
    assert result is not None
