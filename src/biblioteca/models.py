from datetime import date
from sqlalchemy import String, Integer, Numeric, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from biblioteca.db import Base

class Aluno(Base):
    __tablename__ = "aluno"
    id_aluno: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ra: Mapped[str | None] = mapped_column(String(7), unique=True, nullable=True)
    nome: Mapped[str] = mapped_column(String(80), nullable=False)
    sobrenome: Mapped[str] = mapped_column(String(80), nullable=False)
    data_nascimento: Mapped[date | None] = mapped_column(Date)
    endereco: Mapped[str | None] = mapped_column(String(200))
    email: Mapped[str | None] = mapped_column(String(80))
    celular: Mapped[str] = mapped_column(String(20), nullable=False)

class Livro(Base):
    __tablename__ = "livro"
    id_livro: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    titulo: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    autor: Mapped[str] = mapped_column(String(150), nullable=False)
    editora: Mapped[str] = mapped_column(String(100), nullable=False)
    ano_publicacao: Mapped[str | None] = mapped_column(String(5))
    isbn: Mapped[str | None] = mapped_column(String(20))
    quant_total: Mapped[int] = mapped_column(Integer, nullable=False)
    quant_disponivel: Mapped[int] = mapped_column(Integer, nullable=False)
    valor_aquisicao: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False))
    status_livro_emprestado: Mapped[str | None] = mapped_column(String(20))

class Emprestimo(Base):
    __tablename__ = "emprestimo"
    id_emprestimo: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_aluno: Mapped[int] = mapped_column(Integer, ForeignKey("aluno.id_aluno", ondelete="RESTRICT"), nullable=False, index=True)
    id_livro: Mapped[int] = mapped_column(Integer, ForeignKey("livro.id_livro", ondelete="RESTRICT"), nullable=False, index=True)
    data_emprestimo: Mapped[date] = mapped_column(Date, nullable=False)
    data_devolucao: Mapped[date | None] = mapped_column(Date)
    status_emprestimo: Mapped[str | None] = mapped_column(String(20))
