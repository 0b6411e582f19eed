from __future__ import annotations

from farmacia_bot.domain.entities.pharmacy import Pharmacy
from farmacia_bot.domain.entities.live_info import LiveInfo

CANCEL_HINT = 'A qualquer momento você pode dizer *"cancelar"* para parar.'

WELCOME = (
    "👋 Olá! Que bom falar com você 😊. Eu sou um assistente virtual e posso te ajudar a encontrar "
    "farmácias próximas com o remédio que você precisa. Me envie um áudio com o nome do remédio "
    "ou escreva aqui o que deseja.\n\n" + CANCEL_HINT
)
HELP = (
    'ℹ️ Para começar, me envie um áudio com o nome do remédio que você precisa ou digite "ajuda" '
    "para ver as opções.\n\n" + CANCEL_HINT
)
CANCELLED = "❌ Operação cancelada. Se precisar de ajuda novamente, é só me chamar!"
ASK_ADDRESS = "✅ Ótimo! Agora, por favor, me diga seu endereço completo (com bairro e cidade)."
ASK_DRUG_AGAIN = "🔁 Por favor, envie novamente o nome do remédio que você precisa."
ASK_DRUG_NAME = "📍 Obrigado! Agora me diga o nome do remédio que você precisa."
NO_RESULTS = (
    "🚫 Não encontrei farmácias por perto. Para tentar outro endereço, diga \"cancelar\" e comece novamente."
)
ADDRESS_NOT_FOUND = (
    "📍 Não consegui localizar esse endereço. Por favor, me envie o endereço completo novamente "
    "(rua, número, bairro e cidade)."
)
SEARCH_FAILED = "⚠️ Não consegui consultar as farmácias agora. Tente novamente em alguns minutos."
ORDER_CANCELLED = "❌ Pedido cancelado. Você pode entrar em contato manualmente se desejar."
ASK_YES_NO = '❗ Por favor, responda *"SIM"* para confirmar o envio ou *"NÃO"* para cancelar.'
SENDING_ORDER = "⏳ Enviando pedido para a farmácia..."
AUDIO_UNINTELLIGIBLE = "❌ Não consegui entender o áudio. Tente novamente."
AUDIO_FAILED = "⚠️ Ocorreu um erro ao processar seu áudio. Tente novamente ou digite sua resposta."
UNSUPPORTED_MEDIA = "ℹ️ Por enquanto eu só entendo mensagens de texto e áudio.\n\n" + CANCEL_HINT

DISPATCH_SENT = "Pedido enviado com sucesso!"
DISPATCH_INVALID_PHONE = "Número de telefone inválido"
DISPATCH_NOT_REGISTERED = "Esta farmácia não possui WhatsApp registrado"
DISPATCH_FAILED = (
    "Erro ao enviar pedido. Por favor, tente novamente mais tarde ou contate a farmácia diretamente."
)
PAYMENT_NOTE = "Dinheiro"


def confirm_drug(candidate: str) -> str:
    return (
        f"Você disse: *{candidate}*\n\n"
        'Este é o nome correto do remédio que você precisa? Responda *"SIM"* para confirmar '
        'ou *"NÃO"* para corrigir.'
    )


def searching(drug_name: str) -> str:
    return f"🔍 Procurando farmácias próximas com o remédio: *{drug_name}*..."


def pharmacy_list(pharmacies: list[Pharmacy] | tuple[Pharmacy, ...], drug_name: str) -> str:
    lines = ["🏥 Farmácias próximas:"]
    for i, pharmacy in enumerate(pharmacies, start=1):
        lines.append(f"\n{i}. *{pharmacy.name}*\n📍 {pharmacy.address}")
    lines.append(
        f'\n\nDeseja que eu entre em contato com alguma dessas farmácias perguntando pelo remédio "{drug_name}"? '
        f'Me diga o número da farmácia da lista (1 a {len(pharmacies)}) ou "cancelar" para parar.'
    )
    return "".join(lines)


def invalid_selection(count: int) -> str:
    return (
        f"❗ Por favor, envie um número entre 1 e {count} correspondente à farmácia desejada "
        'ou "cancelar" para parar.'
    )


def pharmacy_card(pharmacy: Pharmacy, info: LiveInfo, drug_name: str) -> str:
    return (
        "✉️ *Informações da Farmácia*\n\n"
        f"🏥 *{pharmacy.name}*\n"
        f"📍 {pharmacy.address}\n"
        f"📞 {info.phone or 'Telefone não encontrado'}\n"
        f"🟢 {info.status}\n\n"
        f"💊 *Remédio solicitado:* {drug_name}\n\n"
    )


def offer_dispatch(drug_name: str, address: str) -> str:
    return (
        f"Deseja que eu envie uma mensagem para esta farmácia perguntando sobre o remédio *{drug_name}* "
        f"e informando seu endereço *{address}*?\n\n"
        'Responda *"SIM"* para confirmar ou *"NÃO"* para cancelar.'
    )


def suggested_message(drug_name: str) -> str:
    return (
        "*Mensagem sugerida:*\n"
        f'"Olá! Gostaria de saber se vocês têm o remédio {drug_name} e qual o valor. Obrigado!"'
    )


def order_sent(pharmacy_name: str, drug_name: str, address: str) -> str:
    return (
        "✅ Pedido enviado! A farmácia foi contatada com estas informações:\n\n"
        f"🏥 *Farmácia:* {pharmacy_name}\n"
        f"💊 *Remédio:* {drug_name}\n"
        f"📍 *Endereço:* {address}\n"
        f"💵 *Pagamento:* {PAYMENT_NOTE}\n\n"
        "Aguarde a resposta deles. Vou te avisar quando responderem!"
    )


def order_failed(reason: str, phone: str) -> str:
    return f"❌ {reason}\n\nVocê pode tentar entrar em contato manualmente pelo número: {phone}"


def order_request(pharmacy_name: str, drug_name: str, address: str, bot_name: str) -> str:
    return (
        f"*Mensagem Automática - {bot_name}*\n\n"
        f"Olá, {pharmacy_name}!\n\n"
        "Estou ajudando um(a) idoso(a) que necessita do seguinte medicamento:\n\n"
        f"💊 *Medicamento solicitado:* {drug_name}\n\n"
        f"📍 *Endereço para entrega:* {address}\n\n"
        f"💵 *Forma de pagamento:* {PAYMENT_NOTE}\n\n"
        "Por favor, nos informe:\n"
        "1. Se possuem este medicamento em estoque\n"
        "2. Valor total com entrega (se aplicável)\n"
        "3. Tempo estimado para entrega\n\n"
        '*Se puderem atender este pedido, por favor responda com "SIM".*\n\n'
        "Agradecemos pela atenção!"
    )


def pharmacy_confirmed(pharmacy_name: str, drug_name: str) -> str:
    return (
        f"🎉 Boa notícia! A farmácia *{pharmacy_name}* confirmou que tem o remédio *{drug_name}*!\n\n"
        "Eles devem entrar em contato com você em breve para combinar os detalhes da entrega."
    )


def pharmacy_replied(pharmacy_name: str, body: str) -> str:
    return (
        f"ℹ️ A farmácia *{pharmacy_name}* respondeu:\n\n"
        f'"{body}"\n\n'
        "Por favor, verifique se precisa tomar alguma providência."
    )
