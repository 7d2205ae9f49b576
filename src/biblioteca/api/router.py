from typing import Annotated, Any, Dict, NoReturn
from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession
from biblioteca.deps import get_session
from biblioteca.exceptions import BibliotecaError

from biblioteca.schemas import (
    Mensagem, INT32_MAX,
    AlunoIn, AlunoOut,
    LivroIn, LivroOut,
    EmprestimoIn, EmprestimoListItem,
)

from biblioteca.actions import (
    list_alunos, register_aluno, update_aluno, delete_aluno,
    list_livros, register_livro, update_livro, delete_livro,
    list_emprestimos, register_emprestimo, update_emprestimo,
)

router = APIRouter()

IdPath = Annotated[int, Path(ge=1, le=INT32_MAX)]

STATUS_BY_CODE = {"INTEGRITY_ERROR": 409, "DB_ERROR": 500}

def _raise_for(r: Dict[str, Any]) -> NoReturn:
    code = r.get("code") or "ERROR"
    status = 404 if code.endswith("_NOT_FOUND") else STATUS_BY_CODE.get(code, 400)
    raise BibliotecaError(r["message"], code=code, status_code=status)

def _mensagem(r: Dict[str, Any]) -> Mensagem:
    if not r["ok"]:
        _raise_for(r)
    return Mensagem(mensagem=r["message"])

@router.get("/", response_model=Mensagem)
async def http_root():
    return Mensagem(mensagem="Olá, Mundo!")

# Livros

@router.get("/listar/livro", response_model=list[LivroOut], tags=["Livros"])
async def http_list_livros(session: AsyncSession = Depends(get_session)):
    r = await list_livros(session)
    if not r["ok"]:
        _raise_for(r)
    return [LivroOut.model_validate(it) for it in r["data"]["items"]]

@router.post("/novo/livro", response_model=Mensagem, tags=["Livros"])
async def http_create_livro(payload: LivroIn, session: AsyncSession = Depends(get_session)):
    return _mensagem(await register_livro(session, data=payload.model_dump()))

@router.delete("/remover/livro/{id_livro}", response_model=Mensagem, tags=["Livros"])
async def http_delete_livro(id_livro: IdPath, session: AsyncSession = Depends(get_session)):
    return _mensagem(await delete_livro(session, id_livro=id_livro))

@router.put("/atualizar/livro/{id_livro}", response_model=Mensagem, tags=["Livros"])
async def http_update_livro(id_livro: IdPath, payload: LivroIn, session: AsyncSession = Depends(get_session)):
    return _mensagem(await update_livro(session, id_livro=id_livro, data=payload.model_dump()))

# Alunos

@router.get("/listar/aluno", response_model=list[AlunoOut], tags=["Alunos"])
async def http_list_alunos(session: AsyncSession = Depends(get_session)):
    r = await list_alunos(session)
    if not r["ok"]:
        _raise_for(r)
    return [AlunoOut.model_validate(it) for it in r["data"]["items"]]

@router.post("/novo/aluno", response_model=Mensagem, tags=["Alunos"])
async def http_create_aluno(payload: AlunoIn, session: AsyncSession = Depends(get_session)):
    return _mensagem(await register_aluno(session, data=payload.model_dump()))

@router.delete("/remover/aluno/{id_aluno}", response_model=Mensagem, tags=["Alunos"])
async def http_delete_aluno(id_aluno: IdPath, session: AsyncSession = Depends(get_session)):
    return _mensagem(await delete_aluno(session, id_aluno=id_aluno))

@router.put("/atualizar/aluno/{id_aluno}", response_model=Mensagem, tags=["Alunos"])
async def http_update_aluno(id_aluno: IdPath, payload: AlunoIn, session: AsyncSession = Depends(get_session)):
    return _mensagem(await update_aluno(session, id_aluno=id_aluno, data=payload.model_dump()))

# Empréstimos

@router.get("/listar/emprestimo", response_model=list[EmprestimoListItem], tags=["Empréstimos"])
async def http_list_emprestimos(session: AsyncSession = Depends(get_session)):
    r = await list_emprestimos(session)
    if not r["ok"]:
        _raise_for(r)
    return [EmprestimoListItem.model_validate(it) for it in r["data"]["items"]]

@router.post("/novo/emprestimo", response_model=Mensagem, tags=["Empréstimos"])
async def http_create_emprestimo(payload: EmprestimoIn, session: AsyncSession = Depends(get_session)):
    return _mensagem(await register_emprestimo(session, data=payload.model_dump()))

@router.put("/atualizar/emprestimo/{id_emprestimo}", response_model=Mensagem, tags=["Empréstimos"])
async def http_update_emprestimo(id_emprestimo: IdPath, payload: EmprestimoIn, session: AsyncSession = Depends(get_session)):
    return _mensagem(await update_emprestimo(session, id_emprestimo=id_emprestimo, data=payload.model_dump()))
