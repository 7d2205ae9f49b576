from datetime import date
from pydantic import BaseModel, ConfigDict, constr, conint, confloat
from pydantic.alias_generators import to_camel

# limite das colunas INTEGER/SERIAL no PostgreSQL
INT32_MAX = 2**31 - 1

class CamelModel(BaseModel):
    # aceita tanto "dataNascimento" quanto "data_nascimento" na entrada
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class Mensagem(BaseModel):
    mensagem: str

class AlunoIn(CamelModel):
    nome: constr(min_length=1, max_length=80)
    sobrenome: constr(min_length=1, max_length=80)
    data_nascimento: date | None = None
    endereco: constr(max_length=200) | None = None
    email: constr(max_length=80) | None = None
    celular: constr(min_length=1, max_length=20)

class AlunoOut(CamelModel):
    id_aluno: int
    ra: str | None
    nome: str
    sobrenome: str
    data_nascimento: date | None
    endereco: str | None
    email: str | None
    celular: str

class LivroIn(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)

    titulo: constr(min_length=1, max_length=200)
    autor: constr(max_length=150)
    editora: constr(max_length=100)
    ano_publicacao: constr(max_length=5) | None = None
    isbn: constr(max_length=20) | None = None
    quant_total: conint(ge=0, le=INT32_MAX)
    quant_disponivel: conint(ge=0, le=INT32_MAX)
    # NUMERIC(10, 2)
    valor_aquisicao: confloat(ge=0, lt=10**8) | None = None
    status_livro_emprestado: constr(max_length=20) | None = "Disponível"

class LivroOut(CamelModel):
    id_livro: int
    titulo: str
    autor: str
    editora: str
    ano_publicacao: str | None
    isbn: str | None
    quant_total: int
    quant_disponivel: int
    valor_aquisicao: float | None
    status_livro_emprestado: str | None

class EmprestimoIn(CamelModel):
    id_aluno: conint(ge=1, le=INT32_MAX)
    id_livro: conint(ge=1, le=INT32_MAX)
    data_emprestimo: date
    data_devolucao: date | None = None
    status_emprestimo: constr(max_length=20) | None = None

class EmprestimoListItem(CamelModel):
    id_emprestimo: int
    id_aluno: int
    nome: str
    id_livro: int
    titulo: str
    data_emprestimo: date
    data_devolucao: date | None
    status_emprestimo: str | None
