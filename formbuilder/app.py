from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from .database import SessionLocal, init_db
from . import crud, models, schemas, stats
from .config import CORS_ORIGINS, STORAGE_ROOT, configure_logging
from .errors import BlockNotActionable, FormBuilderError
from .interactions import active_interaction, resolve
from .presentation import form_to_dict
from .registry import is_actionable
from .storage import LocalStorage
import logging

logger = logging.getLogger(__name__)

app = FastAPI(title='Form Builder - FastAPI Backend')

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

bearer = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_storage():
    return LocalStorage(STORAGE_ROOT)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer), db: Session = Depends(get_db)
) -> models.User:
    user = crud.get_user_by_token(db, credentials.credentials if credentials else None)
    if not user:
        raise HTTPException(status_code=401, detail='Not authenticated')
    return user


def _authorize(form: models.Form, user: models.User):
    if form.user_id != user.id:
        raise HTTPException(status_code=403, detail='This action is unauthorized')


def _owned_form(db: Session, form_id: str, user: models.User) -> models.Form:
    form = crud.get_form(db, form_id)
    if not form:
        raise HTTPException(status_code=404, detail='Form not found')
    _authorize(form, user)
    return form


def _owned_block(db: Session, block_id: str, user: models.User) -> models.FormBlock:
    block = crud.get_block(db, block_id)
    if not block:
        raise HTTPException(status_code=404, detail='Block not found')
    _authorize(block.form, user)
    return block


def _owned_interaction(db: Session, interaction_id: str, user: models.User) -> models.FormBlockInteraction:
    interaction = crud.get_interaction(db, interaction_id)
    if not interaction:
        raise HTTPException(status_code=404, detail='Interaction not found')
    _authorize(interaction.form_block.form, user)
    return interaction


def interaction_to_dict(i: models.FormBlockInteraction) -> dict:
    return {
        'id': i.id,
        'uuid': i.uuid,
        'form_block_id': i.form_block_id,
        'type': i.type,
        'label': i.label,
        'reply': i.reply,
        'sequence': i.sequence,
        'options': i.options or {},
    }


def block_to_dict(b: models.FormBlock) -> dict:
    return {
        'id': b.id,
        'form_id': b.form_id,
        'type': b.type,
        'sequence': b.sequence,
        'title': b.title,
        'message': b.message,
        'interactions': [interaction_to_dict(i) for i in b.interactions],
    }


@app.exception_handler(FormBuilderError)
async def form_builder_error_handler(request: Request, exc: FormBuilderError):
    return JSONResponse(status_code=422, content={'detail': str(exc)})


@app.on_event('startup')
def on_startup():
    configure_logging()
    init_db()


@app.get('/health')
def health():
    return {'status': 'ok'}


@app.post('/api/forms', status_code=201)
def create_form(form: schemas.FormCreate, user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    created = crud.create_form(db, user.id, form.dict())
    return {'form': {'id': created.id, 'name': created.name}}


@app.get('/api/forms')
def list_forms(user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    result = []
    for f in crud.get_forms(db, user.id):
        result.append({'id': f.id, 'name': f.name, 'created_at': f.created_at, **stats.compute(f).to_dict()})
    return {'forms': result}


@app.get('/api/forms/{form_id}')
def get_form(
    form_id: str,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: LocalStorage = Depends(get_storage),
):
    form = _owned_form(db, form_id, user)
    data = form_to_dict(form, storage)
    data['blocks'] = [block_to_dict(b) for b in form.blocks]
    return {'form': data}


@app.get('/api/forms/{form_id}/stats')
def form_stats(form_id: str, user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    form = _owned_form(db, form_id, user)
    return stats.compute(form).to_dict()


@app.post('/api/forms/{form_id}/blocks', status_code=201)
def create_block(
    form_id: str,
    block: schemas.BlockCreate,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    form = _owned_form(db, form_id, user)
    created = crud.create_block(db, form, block.dict())
    return block_to_dict(created)


@app.get('/api/blocks/{block_id}/binding')
def block_binding(block_id: str, user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    block = _owned_block(db, block_id, user)
    return resolve(block).to_dict()


@app.post('/api/blocks/{block_id}/interactions', name='api.interactions.create', status_code=201)
def create_interaction(
    block_id: str,
    payload: schemas.InteractionCreate,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    block = _owned_block(db, block_id, user)
    interaction = crud.create_interaction(db, block, payload.type)
    return interaction_to_dict(interaction)


@app.post('/api/interactions/{interaction_id}', name='api.interactions.update')
def update_interaction(
    interaction_id: str,
    payload: schemas.InteractionUpdate,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _owned_interaction(db, interaction_id, user)
    updated = crud.update_interaction(db, interaction_id, payload.dict(exclude_unset=True))
    if not updated:
        raise HTTPException(status_code=404, detail='Interaction not found')
    return interaction_to_dict(updated)


@app.delete('/api/interactions/{interaction_id}', name='api.interactions.delete')
def delete_interaction(
    interaction_id: str, user: models.User = Depends(get_current_user), db: Session = Depends(get_db)
):
    _owned_interaction(db, interaction_id, user)
    if not crud.delete_interaction(db, interaction_id):
        raise HTTPException(status_code=404, detail='Interaction not found')
    return {'ok': True}


@app.post('/forms/{form_id}/sessions', status_code=201)
def start_session(form_id: str, db: Session = Depends(get_db)):
    form = crud.get_published_form(db, form_id)
    if not form:
        raise HTTPException(status_code=404, detail='Form not found')
    session = crud.create_session(db, form)
    return {'session': {'id': session.id, 'token': session.token, 'form_id': form.id}}


@app.post('/sessions/{token}/responses', status_code=201)
def submit_response(token: str, payload: schemas.ResponseSubmit, db: Session = Depends(get_db)):
    session = crud.get_session_by_token(db, token)
    if not session:
        raise HTTPException(status_code=404, detail='Session not found')

    block = crud.get_block(db, payload.form_block_id)
    if not block or block.form_id != session.form_id:
        raise HTTPException(status_code=404, detail='Block not found')

    if not is_actionable(block.type):
        raise BlockNotActionable(block.type)

    interaction_id = payload.form_block_interaction_id
    if interaction_id and interaction_id not in {i.id for i in block.interactions}:
        raise HTTPException(status_code=404, detail='Interaction not found')

    result = resolve(block).validator(payload.payload)
    if not result.valid:
        logger.info('Rejected answer for block %s', block.id)
        return JSONResponse(status_code=422, content=result.to_dict())

    if not interaction_id:
        active = active_interaction(block)
        interaction_id = active.id if active is not None else None
    response = crud.create_response(db, session, block, payload.payload, interaction_id)
    return {
        'response': {
            'id': response.id,
            'form_block_id': response.form_block_id,
            'form_session_id': response.form_session_id,
            'payload': response.payload,
        }
    }
