import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from lossreport.registry.models import Row


@pytest.fixture()
def negative_loss_rows() -> list[Row]:
    return [
        {"Municipios": "Recife", "Perda": "-10,00", "VD": "100,00", "Diretoria": "D1"},
        {"Municipios": "Olinda", "Perda": "5,50", "VD": "1.000,00", "Diretoria": "D2"},
        {"Municipios": "Recife", "Perda": "-2,50", "VD": "50,00", "Diretoria": ""},
    ]


@pytest.fixture()
def negative_loss_csv() -> bytes:
    return (
        "Municipios;Perda;VD;Diretoria\n"
        "Recife;-10,00;100,00;D1\n"
        "Olinda;5,50;1.000,00;D2\n"
    ).encode("utf-8")


@pytest.fixture()
def deviation_csv() -> bytes:
    return (
        "Diretoria;Gerencia;Localidade;IPDDesvio\n"
        "D1;G1;Caruaru;-5,00\n"
        "D2;G2;Petrolina;-20,00\n"
        "D3;G3;Garanhuns;3,00\n"
    ).encode("utf-8")


@pytest.fixture()
def pdf_upload_bytes() -> bytes:
    """A PDF uploaded by mistake where a CSV export was expected."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Relatorio de perdas")
    c.save()
    return buf.getvalue()
