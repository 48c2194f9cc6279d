# routers/clinico.py
"""
Router para os registros clínicos do paciente: diagnósticos, prescrições,
encaminhamentos, anexos e relatórios clínicos.

As cinco coleções têm o mesmo ciclo de vida, então as rotas são registradas
por `_registrar_rotas` a partir dos schemas de cada uma.
"""

from typing import List, Type

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

import schemas
import crud
from auth import ContextoRequisicao, exige_permissao

router = APIRouter(prefix="/pacientes/{paciente_id}", tags=["Registros Clínicos"])


def _registrar_rotas(recurso: str, nome: str, schema_criacao: Type[BaseModel], schema_atualizacao: Type[BaseModel],
                     schema_resposta: Type[BaseModel]) -> None:
    modelo = crud.REGISTROS_CLINICOS[recurso]
    nao_encontrado = f"{nome} não encontrado(a)"

    @router.get(f"/{recurso}", response_model=schemas.Resposta[List[schema_resposta]], name=f"listar_{recurso}")
    def listar(
        paciente_id: str,
        ctx: ContextoRequisicao = Depends(exige_permissao("view_medical_records")),
    ):
        return {"success": True, "data": crud.listar_registros(ctx.escopo, modelo, paciente_id)}

    @router.post(f"/{recurso}", response_model=schemas.Resposta[schema_resposta],
                 status_code=status.HTTP_201_CREATED, name=f"criar_{recurso}")
    def criar(
        paciente_id: str,
        dados: schema_criacao,
        ctx: ContextoRequisicao = Depends(exige_permissao("create_medical_records")),
    ):
        registro = crud.criar_registro(ctx.escopo, modelo, paciente_id, dados, ctx.usuario.id)
        return {"success": True, "data": registro, "message": f"{nome} registrado(a) com sucesso"}

    @router.put(f"/{recurso}/{{item_id}}", response_model=schemas.Resposta[schema_resposta], name=f"atualizar_{recurso}")
    def atualizar(
        paciente_id: str,
        item_id: str,
        dados: schema_atualizacao,
        ctx: ContextoRequisicao = Depends(exige_permissao("edit_medical_records")),
    ):
        registro = crud.atualizar_registro(ctx.escopo, modelo, paciente_id, item_id, dados)
        if not registro:
            raise HTTPException(status_code=404, detail=nao_encontrado)
        return {"success": True, "data": registro}

    @router.delete(f"/{recurso}/{{item_id}}", response_model=schemas.Mensagem, name=f"deletar_{recurso}")
    def deletar(
        paciente_id: str,
        item_id: str,
        ctx: ContextoRequisicao = Depends(exige_permissao("delete_medical_records")),
    ):
        if not crud.deletar_registro(ctx.escopo, modelo, paciente_id, item_id):
            raise HTTPException(status_code=404, detail=nao_encontrado)
        return {"success": True, "message": f"{nome} excluído(a) com sucesso"}


_registrar_rotas("diagnosticos", "Diagnóstico",
                 schemas.DiagnosticoCreate, schemas.DiagnosticoUpdate, schemas.DiagnosticoResponse)
_registrar_rotas("prescricoes", "Prescrição",
                 schemas.PrescricaoCreate, schemas.PrescricaoUpdate, schemas.PrescricaoResponse)
_registrar_rotas("encaminhamentos", "Encaminhamento",
                 schemas.EncaminhamentoCreate, schemas.EncaminhamentoUpdate, schemas.EncaminhamentoResponse)
_registrar_rotas("anexos", "Anexo",
                 schemas.AnexoCreate, schemas.AnexoUpdate, schemas.AnexoResponse)
_registrar_rotas("relatorios", "Relatório",
                 schemas.RelatorioClinicoCreate, schemas.RelatorioClinicoUpdate, schemas.RelatorioClinicoResponse)
