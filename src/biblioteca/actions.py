from __future__ import annotations
import logging
from typing import Dict, Any, Type

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, insert, update, delete
from sqlalchemy.exc import SQLAlchemyError, IntegrityError

from biblioteca.db import Base
from biblioteca.models import Aluno, Livro, Emprestimo

logger = logging.getLogger(__name__)

CONTACT_ADMIN = "Entre em contato com o administrador do sistema."

def _ok(msg: str, **data):    return {"ok": True,  "message": msg, **({"data": data} if data else {})}
def _err(msg: str, code="", **data): return {"ok": False, "message": msg, "code": code, **({"data": data} if data else {})}

async def _db_failure(session: AsyncSession, ex: SQLAlchemyError, fail_msg: str) -> Dict[str, Any]:
    await session.rollback()
    if isinstance(ex, IntegrityError):
        logger.error(f"{fail_msg} Violação de integridade: {ex.orig}")
        return _err(f"{fail_msg} Verifique se os registros relacionados existem e não estão em uso.",
                    code="INTEGRITY_ERROR")
    logger.error(fail_msg, exc_info=ex)
    return _err(f"{fail_msg} {CONTACT_ADMIN}", code="DB_ERROR")

async def _list(session: AsyncSession, model: Type[Base], order_by, *, fail_msg: str) -> Dict[str, Any]:
    try:
        rows = (await session.execute(select(model.__table__).order_by(order_by))).mappings().all()
    except SQLAlchemyError as ex:
        return await _db_failure(session, ex, fail_msg)
    return _ok(f"{len(rows)} registro(s) encontrado(s).", items=[dict(r) for r in rows])

async def _insert(session: AsyncSession, model: Type[Base], pk, data: Dict[str, Any], *,
                  label: str, ok_msg: str, fail_msg: str) -> Dict[str, Any]:
    try:
        result = await session.execute(insert(model).values(**data).returning(pk))
        new_id = result.scalar_one_or_none()
        await session.commit()
    except SQLAlchemyError as ex:
        return await _db_failure(session, ex, fail_msg)
    if new_id is None:
        logger.warning(f"Nenhuma linha inserida em {model.__tablename__}.")
        return _err(f"{fail_msg} {CONTACT_ADMIN}", code="NOT_CREATED")
    logger.info(f"{label} cadastrado com sucesso. ID: {new_id}")
    return _ok(ok_msg, **{pk.key: new_id})

async def _update(session: AsyncSession, model: Type[Base], pk, pk_value: int, data: Dict[str, Any], *,
                  label: str, ok_msg: str, fail_msg: str, not_found: str) -> Dict[str, Any]:
    stmt = (
        update(model).where(pk == pk_value).values(**data)
        .execution_options(synchronize_session=False)
    )
    try:
        result = await session.execute(stmt)
        await session.commit()
    except SQLAlchemyError as ex:
        return await _db_failure(session, ex, fail_msg)
    if result.rowcount == 0:
        logger.info(f"{label} {pk_value} não encontrado para atualização.")
        return _err(f"{label} não encontrado.", code=not_found)
    logger.info(f"{label} atualizado com sucesso! ID: {pk_value}")
    return _ok(ok_msg, **{pk.key: pk_value})

async def _delete(session: AsyncSession, model: Type[Base], pk, pk_value: int, *,
                  label: str, ok_msg: str, fail_msg: str, not_found: str) -> Dict[str, Any]:
    stmt = delete(model).where(pk == pk_value).execution_options(synchronize_session=False)
    try:
        result = await session.execute(stmt)
        await session.commit()
    except SQLAlchemyError as ex:
        return await _db_failure(session, ex, fail_msg)
    if result.rowcount == 0:
        logger.info(f"{label} {pk_value} não encontrado para remoção.")
        return _err(f"{label} não encontrado.", code=not_found)
    logger.info(f"{label} removido com sucesso! ID: {pk_value}")
    return _ok(ok_msg, **{pk.key: pk_value})

# Alunos

async def list_alunos(session: AsyncSession) -> Dict[str, Any]:
    return await _list(session, Aluno, Aluno.id_aluno,
                       fail_msg="Não foi possível acessar a listagem de alunos.")

async def register_aluno(session: AsyncSession, *, data: Dict[str, Any]) -> Dict[str, Any]:
    return await _insert(session, Aluno, Aluno.id_aluno, data, label="Aluno",
                         ok_msg="Aluno cadastrado com sucesso!",
                         fail_msg="Não foi possível cadastrar o aluno.")

async def update_aluno(session: AsyncSession, *, id_aluno: int, data: Dict[str, Any]) -> Dict[str, Any]:
    return await _update(session, Aluno, Aluno.id_aluno, id_aluno, data, label="Aluno",
                         ok_msg="Aluno atualizado com sucesso!",
                         fail_msg="Não foi possível atualizar o aluno.",
                         not_found="ALUNO_NOT_FOUND")

async def delete_aluno(session: AsyncSession, *, id_aluno: int) -> Dict[str, Any]:
    return await _delete(session, Aluno, Aluno.id_aluno, id_aluno, label="Aluno",
                         ok_msg="O aluno foi removido com sucesso!",
                         fail_msg="Não foi possível remover o aluno.",
                         not_found="ALUNO_NOT_FOUND")

# Livros

async def list_livros(session: AsyncSession) -> Dict[str, Any]:
    return await _list(session, Livro, Livro.id_livro,
                       fail_msg="Não foi possível acessar a listagem de livros.")

async def register_livro(session: AsyncSession, *, data: Dict[str, Any]) -> Dict[str, Any]:
    return await _insert(session, Livro, Livro.id_livro, data, label="Livro",
                         ok_msg="Livro cadastrado com sucesso!",
                         fail_msg="Não foi possível cadastrar o livro.")

async def update_livro(session: AsyncSession, *, id_livro: int, data: Dict[str, Any]) -> Dict[str, Any]:
    return await _update(session, Livro, Livro.id_livro, id_livro, data, label="Livro",
                         ok_msg="Livro atualizado com sucesso!",
                         fail_msg="Não foi possível atualizar o livro.",
                         not_found="LIVRO_NOT_FOUND")

async def delete_livro(session: AsyncSession, *, id_livro: int) -> Dict[str, Any]:
    return await _delete(session, Livro, Livro.id_livro, id_livro, label="Livro",
                         ok_msg="O livro foi removido com sucesso!",
                         fail_msg="Não foi possível remover o livro.",
                         not_found="LIVRO_NOT_FOUND")

# Empréstimos

async def list_emprestimos(session: AsyncSession) -> Dict[str, Any]:
    q = (
        select(
            Emprestimo.id_emprestimo,
            Emprestimo.id_aluno,
            Aluno.nome,
            Emprestimo.id_livro,
            Livro.titulo,
            Emprestimo.data_emprestimo,
            Emprestimo.data_devolucao,
            Emprestimo.status_emprestimo,
        )
        .select_from(Emprestimo)
        .join(Aluno, Emprestimo.id_aluno == Aluno.id_aluno)
        .join(Livro, Emprestimo.id_livro == Livro.id_livro)
        .order_by(Emprestimo.id_emprestimo)
    )
    try:
        rows = (await session.execute(q)).mappings().all()
    except SQLAlchemyError as ex:
        return await _db_failure(session, ex, "Não foi possível acessar a listagem de empréstimos.")
    return _ok(f"{len(rows)} registro(s) encontrado(s).", items=[dict(r) for r in rows])

async def register_emprestimo(session: AsyncSession, *, data: Dict[str, Any]) -> Dict[str, Any]:
    return await _insert(session, Emprestimo, Emprestimo.id_emprestimo, data, label="Empréstimo",
                         ok_msg="Empréstimo cadastrado com sucesso!",
                         fail_msg="Não foi possível cadastrar o empréstimo.")

async def update_emprestimo(session: AsyncSession, *, id_emprestimo: int, data: Dict[str, Any]) -> Dict[str, Any]:
    return await _update(session, Emprestimo, Emprestimo.id_emprestimo, id_emprestimo, data, label="Empréstimo",
                         ok_msg="Empréstimo atualizado com sucesso!",
                         fail_msg="Não foi possível atualizar o empréstimo.",
                         not_found="EMPRESTIMO_NOT_FOUND")
