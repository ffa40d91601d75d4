# app.py
from __future__ import annotations

import logging
import sys
from pathlib import Path

import streamlit as st

# === asegurar imports del repo ===
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.configuracion import cargar_configuracion, configuracion_desde_hsp
from core.errores import CalculoError
from core.escenarios import analisar_cenarios
from core.financiamiento import detectar_taxa_mensal
from core.irradiancia import HSP_PADRAO, hsp_por_cidade, hsp_por_estado, listar_estados
from core.orquestador import compute
from core.rutas import money_BRL, num, preparar_salida
from reportes.compartir import formatar_telefone, gerar_link_whatsapp, gerar_texto_resumo
from reportes.generar_charts import generar_charts
from reportes.generar_pdf_profesional import generar_pdf_profesional
from ui.resultados import render_resultado
from ui.state_helpers import is_result_stale, save_result_fingerprint

logger = logging.getLogger(__name__)


def _leer_entradas() -> dict:
    with st.sidebar:
        st.header("Dados do cliente")
        cliente = st.text_input("Cliente", "")
        telefone = st.text_input("WhatsApp", "")

        st.header("Orçamento")
        budget = st.number_input("Quanto pode pagar por mês (R$)", value=500.0, min_value=0.0, step=50.0)
        tarifa = st.number_input("Tarifa de energia (R$/kWh)", value=0.85, min_value=0.0, step=0.01, format="%.3f")
        conta = st.number_input("Conta de luz atual (R$/mês, 0 = não informar)", value=0.0, min_value=0.0, step=10.0)

        st.header("Localização")
        estados = listar_estados()
        opciones = ["--"] + [e["codigo"] for e in estados]
        nombres = {e["codigo"]: f'{e["codigo"]} - {e["nome"]} (HSP {num(e["hsp"], 1)})' for e in estados}
        estado = st.selectbox("Estado", options=opciones, format_func=lambda c: nombres.get(c, "Padrão"))
        cidade = st.text_input("Cidade (opcional)", "")

    return {
        "cliente": cliente.strip(),
        "telefone": telefone.strip(),
        "client_budget": float(budget),
        "current_tariff": float(tarifa),
        "current_bill": float(conta) if conta > 0 else None,
        "estado": None if estado == "--" else estado,
        "cidade": cidade.strip() or None,
    }


def _hsp(entradas: dict) -> float:
    if entradas["cidade"]:
        return hsp_por_cidade(entradas["cidade"])
    if entradas["estado"]:
        return hsp_por_estado(entradas["estado"])
    return HSP_PADRAO


def _render_detector_taxa() -> None:
    with st.expander("Verificar taxa de uma proposta de banco", expanded=False):
        c1, c2, c3 = st.columns(3)
        pv = c1.number_input("Valor financiado (R$)", value=20000.0, min_value=0.0, step=500.0)
        n = c2.number_input("Parcelas", value=60, min_value=1, step=1)
        pmt = c3.number_input("Valor da parcela (R$)", value=500.0, min_value=0.0, step=10.0)
        try:
            t = detectar_taxa_mensal(pv, int(n), pmt)
        except CalculoError as e:
            st.info(str(e))
            return
        st.write(
            f"Taxa: **{num(t.taxa_mensal, 2)}% a.m.** ({num(t.taxa_anual, 1)}% a.a.) • "
            f"juros totais {money_BRL(t.juros_totais)} • {t.semaforo}"
        )


def main() -> None:
    st.set_page_config(page_title="Calculadora Solar Reversa", layout="wide")
    st.title("Calculadora Solar Reversa")

    entradas = _leer_entradas()
    run = st.sidebar.button("Calcular", type="primary")

    if is_result_stale(st.session_state, entradas):
        st.session_state.pop("resultado", None)

    if run:
        hsp = _hsp(entradas)
        cfg = configuracion_desde_hsp(cargar_configuracion(), hsp)
        try:
            result = compute(
                entradas["client_budget"],
                entradas["current_tariff"],
                cfg,
                entradas["current_bill"],
            )
            cenarios = analisar_cenarios(
                entradas["client_budget"], entradas["current_tariff"], cfg, entradas["current_bill"]
            )
        except CalculoError as e:
            st.error(str(e))
            st.stop()

        logger.info("Cálculo: budget=%.2f hsp=%.2f -> %.2f kWp", entradas["client_budget"], hsp, result.recommendation.power_kwp)
        st.session_state["resultado"] = (result, cfg, cenarios)
        save_result_fingerprint(st.session_state, entradas)

    if "resultado" not in st.session_state:
        st.info("Informe o orçamento na barra lateral e pressione **Calcular**.")
        _render_detector_taxa()
        return

    result, cfg, cenarios = st.session_state["resultado"]
    paths = preparar_salida("salidas")

    charts = {}
    try:
        charts = generar_charts(result, entradas["current_tariff"], cfg, paths["charts_dir"])
        paths.update(charts)
    except OSError as e:
        st.warning(f"Não foi possível gerar os gráficos: {e}")

    render_resultado(result, entradas["current_tariff"], cfg, charts, cenarios)

    st.subheader("Compartilhar")
    texto = gerar_texto_resumo(result, entradas["client_budget"], cfg)
    st.text_area("Resumo", texto, height=320)
    if entradas["telefone"]:
        st.caption(f"Enviar para {formatar_telefone(entradas['telefone'])}")
    st.link_button("Abrir no WhatsApp", gerar_link_whatsapp(entradas["telefone"], texto))

    try:
        pdf_path = generar_pdf_profesional(
            result,
            {"cliente": entradas["cliente"], "ubicacion": entradas["cidade"] or entradas["estado"] or ""},
            entradas["current_tariff"],
            cfg,
            paths,
        )
        with open(pdf_path, "rb") as f:
            st.download_button("Baixar proposta (PDF)", data=f, file_name="proposta_solar.pdf", mime="application/pdf")
    except OSError as e:
        st.warning(f"Não foi possível gerar o PDF: {e}")

    _render_detector_taxa()


if __name__ == "__main__":
    main()
