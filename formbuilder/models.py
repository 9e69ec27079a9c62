from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, Text, JSON, UniqueConstraint, func
from sqlalchemy.orm import relationship
from .database import Base
from .enums import FormBlockType


class User(Base):
    __tablename__ = 'users'
    id = Column(String, primary_key=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=True)
    api_token = Column(String, unique=True, index=True, nullable=True)
    # legal defaults shown on every form of this user
    company_name = Column(String, nullable=True)
    company_description = Column(Text, nullable=True)
    privacy_link = Column(String, nullable=True)
    legal_notice_link = Column(String, nullable=True)
    privacy_contact_person = Column(String, nullable=True)
    privacy_contact_email = Column(String, nullable=True)
    forms = relationship('Form', back_populates='user', cascade='all, delete')


class Form(Base):
    __tablename__ = 'forms'
    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    published_at = Column(DateTime(timezone=True), nullable=True)
    brand_color = Column(String, nullable=True)
    avatar_path = Column(String, nullable=True)
    privacy_link = Column(String, nullable=True)
    legal_notice_link = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    user = relationship('User', back_populates='forms')
    blocks = relationship(
        'FormBlock', back_populates='form', cascade='all, delete', order_by='FormBlock.sequence'
    )
    sessions = relationship('FormSession', back_populates='form', cascade='all, delete')


class FormBlock(Base):
    __tablename__ = 'form_blocks'
    id = Column(String, primary_key=True)
    form_id = Column(String, ForeignKey('forms.id', ondelete='CASCADE'), nullable=False, index=True)
    sequence = Column(Integer, default=0)
    type = Column(String, nullable=False, default=FormBlockType.none.value)
    title = Column(String, nullable=True)
    message = Column(Text, nullable=True)
    form = relationship('Form', back_populates='blocks')
    interactions = relationship(
        'FormBlockInteraction',
        back_populates='form_block',
        cascade='all, delete',
        order_by='FormBlockInteraction.sequence',
    )
    responses = relationship('FormSessionResponse', back_populates='form_block', cascade='all, delete')


class FormBlockInteraction(Base):
    __tablename__ = 'form_block_interactions'
    __table_args__ = (UniqueConstraint('form_block_id', 'uuid', name='uq_interaction_block_uuid'),)
    id = Column(String, primary_key=True)
    form_block_id = Column(String, ForeignKey('form_blocks.id', ondelete='CASCADE'), nullable=False, index=True)
    type = Column(String, nullable=False)
    # externally visible id, editable by the form owner
    uuid = Column(String, nullable=False)
    label = Column(String, nullable=True)
    reply = Column(Text, nullable=True)
    sequence = Column(Integer, default=0)
    options = Column(JSON, nullable=True)
    form_block = relationship('FormBlock', back_populates='interactions')


class FormSession(Base):
    __tablename__ = 'form_sessions'
    id = Column(String, primary_key=True)
    form_id = Column(String, ForeignKey('forms.id', ondelete='CASCADE'), nullable=False, index=True)
    token = Column(String, unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    form = relationship('Form', back_populates='sessions')
    responses = relationship('FormSessionResponse', back_populates='form_session', cascade='all, delete')


class FormSessionResponse(Base):
    __tablename__ = 'form_session_responses'
    id = Column(String, primary_key=True)
    form_block_id = Column(String, ForeignKey('form_blocks.id', ondelete='CASCADE'), nullable=False, index=True)
    form_session_id = Column(String, ForeignKey('form_sessions.id', ondelete='CASCADE'), nullable=False, index=True)
    form_block_interaction_id = Column(
        String, ForeignKey('form_block_interactions.id', ondelete='SET NULL'), nullable=True
    )
    payload = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    form_block = relationship('FormBlock', back_populates='responses')
    form_session = relationship('FormSession', back_populates='responses')
