from anatomy.services.combat_service import apply_body_part_damage, perform_hit
from anatomy.services.injury_ledger import get_current_hp


def test_direct_damage_records_raw_injury(db, humanoid):
    assert apply_body_part_damage(db, humanoid, "left_leg", 2.5, damage_type="pierce")

    injury = db.creatures.get_model(humanoid).injuries[0]
    assert injury.part_id == "left_leg"
    assert injury.amount == 250
    assert injury.type == "pierce"
    assert injury.source == "direct"
    assert injury.status == "raw"


def test_direct_damage_defaults_to_blunt(db, humanoid):
    apply_body_part_damage(db, humanoid, "torso", 1, damage_type="")
    assert db.creatures.get_model(humanoid).injuries[0].type == "blunt"


def test_direct_damage_on_unknown_part(db, humanoid):
    assert apply_body_part_damage(db, humanoid, "tail", 3) is False
    assert db.creatures.get_model(humanoid).injuries == []


def test_hit_defaults_to_root_and_can_stay_there(db, humanoid, scripted_rolls):
    # 9200 and above is not covered by any torso child
    result = perform_hit(db, humanoid, 6, rng=scripted_rolls(9500))
    assert result.success
    assert result.target_part == "torso"
    assert result.damage == 6
    assert result.body_part.current_hp == 34
    assert result.body_part.status == "healthy"


def test_hit_descends_through_coverage(db, humanoid, scripted_rolls):
    # torso: 6500 -> head; head: 0 -> brain
    rng = scripted_rolls(6500, 0)
    result = perform_hit(db, humanoid, 4, rng=rng)
    assert result.target_part == "brain"
    assert rng.calls == 2
    assert get_current_hp(db.creatures.get_model(humanoid), "brain") == 6
    assert get_current_hp(db.creatures.get_model(humanoid), "head") == 20


def test_hit_aimed_at_a_limb(db, humanoid, scripted_rolls):
    result = perform_hit(db, humanoid, 15, target_part="left_arm", rng=scripted_rolls(2499))
    assert result.target_part == "left_hand"
    assert result.body_part.current_hp == 0
    assert result.body_part.status == "destroyed"


def test_hit_on_leaf_needs_no_roll(db, humanoid, scripted_rolls):
    rng = scripted_rolls()
    result = perform_hit(db, humanoid, 1, target_part="left_eye", rng=rng)
    assert result.target_part == "left_eye"
    assert rng.calls == 0


def test_hit_on_unknown_part_reports_failure(db, humanoid, scripted_rolls):
    result = perform_hit(db, humanoid, 1, target_part="tail", rng=scripted_rolls())
    assert result.target_part == "tail"
    assert result.success is False
    assert result.body_part is None


def test_hit_on_creature_without_anatomy(db, creature_id):
    assert perform_hit(db, creature_id, 5) is None


def test_hit_on_missing_creature(db):
    assert perform_hit(db, "nobody", 5) is None


def test_hit_without_rng_uses_fresh_source(db, humanoid):
    result = perform_hit(db, humanoid, 1)
    assert result.success
    assert result.target_part in db.creatures.get_model(humanoid).body_parts
