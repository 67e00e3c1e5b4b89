# colorful_birds/api/schemas.py

from marshmallow import Schema, fields
from marshmallow.validate import Range

from colorful_birds.game_core.constants import DIE_MIN, DIE_MAX

# --- Входящие запросы ---

class RollRequestSchema(Schema):
    """
    Бросок кубика. Если value не передан, кубик бросает сервер.
    strict=True: строки и дроби не превращаются в число молча.
    """
    value = fields.Integer(
        strict=True,
        allow_none=True,
        load_default=None,
        validate=Range(
            min=DIE_MIN,
            max=DIE_MAX,
            error=f"Значение кубика должно быть от {DIE_MIN} до {DIE_MAX}."
        )
    )

# --- Модель чтения (наружу) ---

class PlayerSchema(Schema):
    id = fields.Integer()
    name = fields.String()
    color = fields.String()
    score = fields.Integer()
    position = fields.Integer()


class StandingSchema(Schema):
    place = fields.Integer()
    label = fields.String()
    player = fields.Nested(PlayerSchema)


class BoardSchema(Schema):
    size = fields.Integer()
    total_tiles = fields.Integer()
    pattern = fields.List(fields.String())
    layout = fields.List(fields.List(fields.Integer()))


class GameSnapshotSchema(Schema):
    game_id = fields.String()
    phase = fields.Function(lambda obj: obj['phase'].value)
    started = fields.Boolean()
    players = fields.List(fields.Nested(PlayerSchema))
    current_player_id = fields.Integer()
    current_player_has_rolled = fields.Boolean()
    current_roll = fields.Integer(allow_none=True)
    winner = fields.Nested(PlayerSchema, allow_none=True)
    animation_in_progress = fields.Boolean()

    # --- Эфемерные поля анимации ---
    moving_player_id = fields.Integer(allow_none=True)
    last_position = fields.Integer(allow_none=True)
    current_animation_path = fields.List(fields.Integer(), allow_none=True)
    animation_tile = fields.Integer(allow_none=True)
    score_flash_player_id = fields.Integer(allow_none=True)

    standings = fields.List(fields.Nested(StandingSchema))
    turn_number = fields.Integer()
    epoch = fields.Integer()
    board = fields.Nested(BoardSchema)
