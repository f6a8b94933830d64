from prometheus_client import Counter, generate_latest, CONTENT_TYPE_LATEST

TOKENS_GRANTED     = Counter("referral_tokens_granted_total", "Tokens de referido emitidos")
TOKENS_REDEEMED    = Counter("referral_tokens_redeemed_total", "Tokens de referido redimidos")
REDEEM_REJECTED    = Counter("referral_redeem_rejected_total", "Redenciones rechazadas", ["reason"])
WAITING_LIST_JOINS = Counter("waiting_list_joins_total", "Altas en la lista de espera")

def metrics_http_response():
    return generate_latest(), 200, {"Content-Type": CONTENT_TYPE_LATEST}
