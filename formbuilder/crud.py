from sqlalchemy.orm import Session
from . import models
from .options import merge_options
from .presentation import is_published
from .registry import describe, interaction_type_of
from .errors import DuplicateInteractionUuid, InteractionTypeNotAccepted
import logging
import secrets
import uuid
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

INTERACTION_FIELDS = ('label', 'reply', 'uuid')


def gen_id() -> str:
    return str(uuid.uuid4())


def get_user_by_token(db: Session, token: str) -> Optional[models.User]:
    if not token:
        return None
    return db.query(models.User).filter(models.User.api_token == token).first()


def create_form(db: Session, user_id: str, form_data: dict) -> models.Form:
    form = models.Form(
        id=gen_id(),
        user_id=user_id,
        name=form_data['name'],
        description=form_data.get('description'),
        published_at=form_data.get('published_at'),
        brand_color=form_data.get('brand_color'),
        privacy_link=form_data.get('privacy_link'),
        legal_notice_link=form_data.get('legal_notice_link'),
    )
    db.add(form)
    db.commit()
    db.refresh(form)
    logger.info('Created form %s for user %s', form.id, user_id)
    return form


def get_forms(db: Session, user_id: str) -> List[models.Form]:
    return (
        db.query(models.Form)
        .filter(models.Form.user_id == user_id)
        .order_by(models.Form.created_at.desc())
        .all()
    )


def get_form(db: Session, form_id: str) -> Optional[models.Form]:
    return db.query(models.Form).filter(models.Form.id == form_id).first()


def get_published_form(db: Session, form_id: str) -> Optional[models.Form]:
    form = get_form(db, form_id)
    if not form or not is_published(form):
        return None
    return form


def create_block(db: Session, form: models.Form, block_data: dict) -> models.FormBlock:
    # validates the tag before anything is written
    block_type = describe(block_data.get('type') or 'none').type
    sequence = block_data.get('sequence')
    if sequence is None:
        sequence = len(form.blocks)
    block = models.FormBlock(
        id=gen_id(),
        form_id=form.id,
        type=block_type.value,
        title=block_data.get('title'),
        message=block_data.get('message'),
        sequence=sequence,
    )
    db.add(block)
    db.commit()
    db.refresh(block)
    return block


def get_block(db: Session, block_id: str) -> Optional[models.FormBlock]:
    return db.query(models.FormBlock).filter(models.FormBlock.id == block_id).first()


def create_interaction(db: Session, block: models.FormBlock, interaction_type: str) -> models.FormBlockInteraction:
    interaction_type = interaction_type_of(interaction_type)
    if not describe(block.type).accepts(interaction_type):
        raise InteractionTypeNotAccepted(block.type, interaction_type.value)

    interaction = models.FormBlockInteraction(
        id=gen_id(),
        form_block_id=block.id,
        type=interaction_type.value,
        uuid=gen_id(),
        sequence=len(block.interactions),
        options={},
    )
    db.add(interaction)
    db.commit()
    db.refresh(interaction)
    logger.info('Created %s interaction %s on block %s', interaction.type, interaction.id, block.id)
    return interaction


def get_interaction(db: Session, interaction_id: str) -> Optional[models.FormBlockInteraction]:
    return (
        db.query(models.FormBlockInteraction)
        .filter(models.FormBlockInteraction.id == interaction_id)
        .first()
    )


def _uuid_taken(db: Session, interaction: models.FormBlockInteraction, value: str) -> bool:
    return (
        db.query(models.FormBlockInteraction.id)
        .filter(
            models.FormBlockInteraction.form_block_id == interaction.form_block_id,
            models.FormBlockInteraction.uuid == value,
            models.FormBlockInteraction.id != interaction.id,
        )
        .first()
        is not None
    )


def update_interaction(db: Session, interaction_id: str, updates: dict) -> Optional[models.FormBlockInteraction]:
    """
    Apply a partial update to an interaction.

    ``label``, ``reply`` and ``uuid`` are replaced when present. ``options`` is
    merged key by key into the stored bag. The row is locked for the whole
    read-modify-write so racing option updates cannot drop each other's keys.
    """
    interaction = (
        db.query(models.FormBlockInteraction)
        .filter(models.FormBlockInteraction.id == interaction_id)
        .with_for_update()
        .populate_existing()
        .first()
    )
    if not interaction:
        return None

    for k in INTERACTION_FIELDS:
        if k not in updates:
            continue
        if k == 'uuid' and not updates[k]:
            continue
        if k == 'uuid' and _uuid_taken(db, interaction, updates[k]):
            db.rollback()
            raise DuplicateInteractionUuid(updates[k])
        setattr(interaction, k, updates[k])

    options = updates.get('options')
    if options:
        try:
            # assign a new dict so the JSON column is flagged as changed
            interaction.options = merge_options(interaction.options, options)
        except ValueError:
            db.rollback()
            raise

    db.commit()
    db.refresh(interaction)
    logger.info('Updated interaction %s (%s)', interaction.id, ', '.join(sorted(updates)) or 'no fields')
    return interaction


def delete_interaction(db: Session, interaction_id: str) -> bool:
    interaction = get_interaction(db, interaction_id)
    if not interaction:
        return False
    db.delete(interaction)
    db.commit()
    logger.info('Deleted interaction %s', interaction_id)
    return True


def create_session(db: Session, form: models.Form) -> models.FormSession:
    session = models.FormSession(id=gen_id(), form_id=form.id, token=secrets.token_urlsafe(24))
    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info('Started session %s on form %s', session.id, form.id)
    return session


def get_session_by_token(db: Session, token: str) -> Optional[models.FormSession]:
    return db.query(models.FormSession).filter(models.FormSession.token == token).first()


def create_response(
    db: Session,
    session: models.FormSession,
    block: models.FormBlock,
    payload: Any,
    interaction_id: Optional[str] = None,
) -> models.FormSessionResponse:
    response = models.FormSessionResponse(
        id=gen_id(),
        form_block_id=block.id,
        form_session_id=session.id,
        form_block_interaction_id=interaction_id,
        payload=payload,
    )
    db.add(response)
    db.commit()
    db.refresh(response)
    logger.info('Recorded response %s for block %s', response.id, block.id)
    return response
