import pytest
from sqlalchemy import event
from sqlalchemy.dialects import postgresql

from app.core.errors import DrawNotAllowed, EmptyUpdate, MissingTeams, NotFound, TeamNotInMatch
from app.models import Match, MatchStatus, MatchType, Team
from app.schemas.match_schemas import GoalCreate, MatchUpdate
from app.services import bracket_builder, match_service


@pytest.fixture
def teams(db, make_tournament):
    tournament = make_tournament()
    teams = [Team(name=f"Team {i + 1}", tournament_id=tournament.id) for i in range(4)]
    db.add_all(teams)
    db.commit()
    bracket_builder.rebuild(db, tournament.id, teams)
    db.commit()
    return teams


def _match(db, tournament_id, match_type):
    return db.query(Match).filter(Match.tournament_id == tournament_id, Match.match_type == match_type).one()


def _finish(db, match, score_a, score_b):
    return match_service.update_match(
        db, match.id, MatchUpdate(score_a=score_a, score_b=score_b, status=MatchStatus.FINAL)
    )


class TestResolveWinnerLoser:
    def test_home_win(self):
        match = Match(match_type=MatchType.SEMI_1, team_a_id=1, team_b_id=2, score_a=3, score_b=1)
        assert match_service.resolve_winner_loser(match) == (1, 2)

    def test_away_win(self):
        match = Match(match_type=MatchType.SEMI_2, team_a_id=3, team_b_id=4, score_a=0, score_b=2)
        result = match_service.resolve_winner_loser(match)
        assert result.winner == 4
        assert result.loser == 3

    def test_draw_raises(self):
        match = Match(match_type=MatchType.SEMI_1, team_a_id=1, team_b_id=2, score_a=2, score_b=2)
        with pytest.raises(DrawNotAllowed):
            match_service.resolve_winner_loser(match)

    def test_missing_team_raises(self):
        match = Match(match_type=MatchType.SEMI_2, team_a_id=3, team_b_id=None, score_a=1, score_b=0)
        with pytest.raises(MissingTeams):
            match_service.resolve_winner_loser(match)


class TestPlayoffPropagation:
    def test_one_final_semifinal_leaves_playoffs_empty(self, db, teams):
        tid = teams[0].tournament_id
        _finish(db, _match(db, tid, MatchType.SEMI_1), 3, 1)

        final = _match(db, tid, MatchType.FINAL)
        assert final.team_a_id is None
        assert final.team_b_id is None
        assert match_service.on_semifinal_finalized(db, tid) is False

    def test_both_semifinals_seed_final_and_third_place(self, db, teams):
        tid = teams[0].tournament_id
        _finish(db, _match(db, tid, MatchType.SEMI_1), 3, 1)
        _finish(db, _match(db, tid, MatchType.SEMI_2), 0, 2)

        final = _match(db, tid, MatchType.FINAL)
        third = _match(db, tid, MatchType.THIRD_PLACE)
        assert (final.team_a_id, final.team_b_id) == (teams[0].id, teams[3].id)
        assert (third.team_a_id, third.team_b_id) == (teams[1].id, teams[2].id)
        for playoff in (final, third):
            assert (playoff.score_a, playoff.score_b) == (0, 0)
            assert playoff.status == MatchStatus.SCHEDULED

    def test_drawn_semifinal_is_rejected_and_rolled_back(self, db, teams):
        tid = teams[0].tournament_id
        _finish(db, _match(db, tid, MatchType.SEMI_1), 3, 1)
        semi_2 = _match(db, tid, MatchType.SEMI_2)

        with pytest.raises(DrawNotAllowed):
            _finish(db, semi_2, 2, 2)

        semi_2 = _match(db, tid, MatchType.SEMI_2)
        assert semi_2.status == MatchStatus.SCHEDULED
        assert (semi_2.score_a, semi_2.score_b) == (0, 0)
        final = _match(db, tid, MatchType.FINAL)
        assert final.team_a_id is None
        assert final.team_b_id is None

    def test_draw_rejected_while_other_semifinal_open(self, db, teams):
        tid = teams[0].tournament_id
        with pytest.raises(DrawNotAllowed):
            _finish(db, _match(db, tid, MatchType.SEMI_1), 1, 1)
        assert _match(db, tid, MatchType.SEMI_1).status == MatchStatus.SCHEDULED

    def test_drawn_score_allowed_while_in_progress(self, db, teams):
        tid = teams[0].tournament_id
        semi_1 = _match(db, tid, MatchType.SEMI_1)
        updated = match_service.update_match(
            db, semi_1.id, MatchUpdate(score_a=1, score_b=1, status=MatchStatus.IN_PROGRESS)
        )
        assert updated.status == MatchStatus.IN_PROGRESS
        assert (updated.score_a, updated.score_b) == (1, 1)

    def test_corrected_semifinal_reseeds_playoffs(self, db, teams):
        tid = teams[0].tournament_id
        _finish(db, _match(db, tid, MatchType.SEMI_1), 3, 1)
        _finish(db, _match(db, tid, MatchType.SEMI_2), 0, 2)
        final = _match(db, tid, MatchType.FINAL)
        match_service.update_match(db, final.id, MatchUpdate(score_a=1, status=MatchStatus.IN_PROGRESS))

        # Score correction on an already final semifinal
        semi_1 = _match(db, tid, MatchType.SEMI_1)
        match_service.update_match(db, semi_1.id, MatchUpdate(score_a=1, score_b=3))

        final = _match(db, tid, MatchType.FINAL)
        third = _match(db, tid, MatchType.THIRD_PLACE)
        assert (final.team_a_id, final.team_b_id) == (teams[1].id, teams[3].id)
        assert (third.team_a_id, third.team_b_id) == (teams[0].id, teams[2].id)
        assert (final.score_a, final.status) == (0, MatchStatus.SCHEDULED)

    def test_semifinal_missing_team_raises(self, db, make_tournament):
        tournament = make_tournament()
        teams = [Team(name=f"Team {i + 1}", tournament_id=tournament.id) for i in range(3)]
        db.add_all(teams)
        db.commit()
        bracket_builder.rebuild(db, tournament.id, teams)
        db.commit()

        with pytest.raises(MissingTeams):
            _finish(db, _match(db, tournament.id, MatchType.SEMI_2), 1, 0)

    def test_final_match_update_does_not_propagate(self, db, teams):
        tid = teams[0].tournament_id
        final = _match(db, tid, MatchType.FINAL)
        updated = _finish(db, final, 2, 2)
        assert updated.status == MatchStatus.FINAL
        assert _match(db, tid, MatchType.THIRD_PLACE).team_a_id is None


class TestUpdateMatch:
    def test_empty_update_raises(self, db, teams):
        match = _match(db, teams[0].tournament_id, MatchType.SEMI_1)
        with pytest.raises(EmptyUpdate):
            match_service.update_match(db, match.id, MatchUpdate())

    def test_missing_match_raises(self, db):
        with pytest.raises(NotFound, match="Match not found"):
            match_service.update_match(db, 999, MatchUpdate(score_a=1))

    def test_partial_update_keeps_other_fields(self, db, teams):
        match = _match(db, teams[0].tournament_id, MatchType.SEMI_1)
        match_service.update_match(db, match.id, MatchUpdate(score_b=4))
        updated = match_service.update_match(db, match.id, MatchUpdate(score_a=2))
        assert (updated.score_a, updated.score_b) == (2, 4)
        assert updated.status == MatchStatus.SCHEDULED


class TestListBracket:
    def test_bracket_order(self, db, teams):
        bracket = match_service.list_bracket(db, teams[0].tournament_id)
        assert [m.match_type for m in bracket] == [
            MatchType.SEMI_1, MatchType.SEMI_2, MatchType.FINAL, MatchType.THIRD_PLACE,
        ]
        assert bracket[0].team_a.id == teams[0].id
        assert bracket[2].team_a is None

    def test_unknown_tournament_raises(self, db):
        with pytest.raises(NotFound):
            match_service.list_bracket(db, 404)


class TestGoals:
    def test_record_list_and_delete(self, db, teams, make_user):
        scorer = make_user()
        helper = make_user()
        match = _match(db, teams[0].tournament_id, MatchType.SEMI_1)

        first = match_service.create_goal(db, match.id, GoalCreate(
            scoring_team_id=teams[0].id, scoring_player_id=scorer.id, assist_player_id=helper.id, minute=4,
        ))
        second = match_service.create_goal(db, match.id, GoalCreate(
            scoring_team_id=teams[1].id, scoring_player_id=helper.id,
        ))

        assert [g.id for g in match_service.list_goals(db, match.id)] == [first.id, second.id]

        deleted = match_service.delete_goal(db, first.id)
        assert deleted.id == first.id
        assert deleted.minute == 4
        assert [g.id for g in match_service.list_goals(db, match.id)] == [second.id]

    def test_team_outside_match_rejected(self, db, teams, make_user):
        scorer = make_user()
        match = _match(db, teams[0].tournament_id, MatchType.SEMI_1)
        with pytest.raises(TeamNotInMatch):
            match_service.create_goal(db, match.id, GoalCreate(
                scoring_team_id=teams[2].id, scoring_player_id=scorer.id,
            ))

    def test_unknown_player_rejected(self, db, teams):
        match = _match(db, teams[0].tournament_id, MatchType.SEMI_1)
        with pytest.raises(NotFound, match="Player not found"):
            match_service.create_goal(db, match.id, GoalCreate(
                scoring_team_id=teams[0].id, scoring_player_id=12345,
            ))

    def test_unknown_match_and_goal(self, db):
        with pytest.raises(NotFound):
            match_service.list_goals(db, 77)
        with pytest.raises(NotFound, match="Goal not found"):
            match_service.delete_goal(db, 77)


class TestUpdateMatchLocking:
    def test_tournament_row_locked_before_semifinals_are_read(self, db, teams):
        tid = teams[0].tournament_id
        semi_1 = _match(db, tid, MatchType.SEMI_1)
        statements = []

        def capture(orm_execute_state):
            if orm_execute_state.is_select:
                statements.append(str(orm_execute_state.statement.compile(dialect=postgresql.dialect())))

        event.listen(db, "do_orm_execute", capture)
        try:
            _finish(db, semi_1, 3, 1)
        finally:
            event.remove(db, "do_orm_execute", capture)

        tournament_locks = [
            i for i, sql in enumerate(statements) if "FROM tournaments" in sql and "FOR UPDATE" in sql
        ]
        semifinal_reads = [i for i, sql in enumerate(statements) if "match_type IN" in sql]
        assert tournament_locks
        assert semifinal_reads
        assert tournament_locks[0] < semifinal_reads[0]
