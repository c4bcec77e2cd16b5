"""
Location page rendering.

The page is a fixed document. The only server-side value in it is the
token, injected once into the client script as a JSON string literal.
"""

import json
from string import Template

INTAKE_PATH = "/api/location"

# Geolocation options (milliseconds)
HIGH_ACCURACY_TIMEOUT = 30000
LOW_ACCURACY_TIMEOUT = 20000
LOW_ACCURACY_MAX_AGE = 60000

_PAGE = Template("""<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <meta name="viewport" content="width=device-width, initial-scale=1"/>
  <title>Compartilhar localização</title>
</head>
<body style="font-family:Arial; padding:16px; max-width:640px; margin:auto;">
  <h2>Compartilhar localização</h2>
  <p>Toque no botão para enviar sua localização. (O navegador pode pedir permissão.)</p>

  <button id="btn" style="padding:12px 16px; font-size:16px;">Enviar minha localização</button>
  <pre id="out" style="margin-top:16px; white-space:pre-wrap;"></pre>

<script>
  const TOKEN = $token;
  const out = document.getElementById("out");
  const btn = document.getElementById("btn");

  function getPos(options) {
    return new Promise((resolve, reject) => {
      navigator.geolocation.getCurrentPosition(resolve, reject, options);
    });
  }

  btn.onclick = async () => {
    if (!navigator.geolocation) {
      out.textContent = "Geolocalização não suportada.";
      return;
    }

    btn.disabled = true;
    out.textContent = "Obtendo localização (alta precisão)...";

    let pos;
    try {
      pos = await getPos({ enableHighAccuracy: true, timeout: $high_timeout, maximumAge: 0 });
    } catch (e1) {
      out.textContent = "Alta precisão demorou. Tentando modo padrão...";
      try {
        pos = await getPos({ enableHighAccuracy: false, timeout: $low_timeout, maximumAge: $low_max_age });
      } catch (e2) {
        btn.disabled = false;
        out.textContent =
          "Não foi possível obter a localização. " +
          "Abra em 'Chrome', ative Localização do celular e permita 'Localização precisa'. " +
          "Erro: " + (e2.message || e2);
        return;
      }
    }

    out.textContent = "Enviando...";
    const payload = {
      token: TOKEN,
      lat: pos.coords.latitude,
      lon: pos.coords.longitude,
      acc: pos.coords.accuracy,
      ts: Date.now()
    };

    let r;
    try {
      r = await fetch("$intake_path", {
        method: "POST",
        headers: {"Content-Type": "application/json"},
        body: JSON.stringify(payload)
      });
    } catch (e3) {
      btn.disabled = false;
      out.textContent = "Falha ao enviar ❌ - " + (e3.message || e3);
      return;
    }

    if (r.ok) {
      out.textContent = "Enviado com sucesso ✅";
    } else {
      btn.disabled = false;
      let msg = "Falha ao enviar ❌ (" + r.status + ")";
      try {
        const data = await r.json();
        if (data && data.error) msg += " - " + data.error;
      } catch (_) {}
      out.textContent = msg;
    }
  };
</script>
</body>
</html>
""")


def script_literal(value: str) -> str:
    """
    Encode a string as a JavaScript string literal that is safe inside
    an inline <script> block.
    """
    return (
        json.dumps(value)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


def render_location_page(token: str) -> str:
    """
    Render the location sharing page for a token.

    Only call this for tokens the registry has already accepted.

    Args:
        token: Access token the page will submit with

    Returns:
        str: Complete HTML document
    """
    return _PAGE.substitute(
        token=script_literal(token),
        high_timeout=HIGH_ACCURACY_TIMEOUT,
        low_timeout=LOW_ACCURACY_TIMEOUT,
        low_max_age=LOW_ACCURACY_MAX_AGE,
        intake_path=INTAKE_PATH,
    )
