# app/core/default_rules.py

# Reglas que se precargan por tenant cuando no tiene ninguna.
# Cada grupo coincide con el modo de la regla; "common" aplica a ambos modos.
# Orden = prioridad de inserción; a igual prioridad gana la insertada primero.

DEFAULT_RULES = {
    "common": [
        {
            "mode": "common",
            "condition": "saludo_basico",
            "triggers": ["hola", "buenas", "buen dia", "buenas tardes", "buenas noches", "hey"],
            "action": "¡Hola! Soy el asistente de {name}. ¿En qué te puedo ayudar?",
            "priority": 100,
        },
        {
            "mode": "common",
            "condition": "despedida",
            "triggers": ["chau", "adios", "hasta luego", "gracias por todo", "nos vemos"],
            "action": "¡Gracias por escribirnos! Cuando quieras, acá estamos.",
            "priority": 90,
        },
        {
            "mode": "common",
            "condition": "horario",
            "triggers": ["horario", "horarios", "a que hora abren", "que dias abren", "estan abiertos"],
            "action": "Nuestro horario es: {hours}.",
            "priority": 80,
        },
        {
            "mode": "common",
            "condition": "direccion",
            "triggers": ["direccion", "donde estan", "ubicacion", "como llego"],
            "action": "Estamos en {address}.",
            "priority": 80,
        },
        {
            "mode": "common",
            "condition": "telefono",
            "triggers": ["telefono", "whatsapp", "celular", "numero de contacto"],
            "action": "Nos podés llamar al {phone}.",
            "priority": 70,
        },
    ],
    "sales": [
        {
            "mode": "sales",
            "condition": "precio",
            "triggers": ["precio", "cuanto sale", "cuanto cuesta", "que valor tiene"],
            "action": "{product_name} cuesta ${price}.",
            "priority": 60,
        },
        {
            "mode": "sales",
            "condition": "stock",
            "triggers": ["stock", "tienen", "hay disponible", "les queda"],
            "action": "De {product_name} tenemos {stock} unidades.",
            "priority": 55,
        },
        {
            "mode": "sales",
            "condition": "catalogo",
            "triggers": ["catalogo", "que venden", "productos", "lista de precios"],
            "action": "Vendemos: {product_catalog}. Decime cuál te interesa.",
            "priority": 50,
        },
        {
            "mode": "sales",
            "condition": "medios_pago",
            "triggers": ["medios de pago", "formas de pago", "tarjeta", "transferencia", "efectivo"],
            "action": "Medios de pago: {payment_methods}. Pagando en efectivo: {cash_discount}.",
            "priority": 50,
        },
    ],
    "reservations": [
        {
            "mode": "reservations",
            "condition": "servicios",
            "triggers": ["servicios", "que hacen", "que ofrecen", "tratamientos"],
            "action": "Nuestros servicios: {service_list}.",
            "priority": 60,
        },
        {
            "mode": "reservations",
            "condition": "cancelacion",
            "triggers": ["politica de cancelacion", "puedo cancelar", "si no puedo ir"],
            "action": "Política de cancelación: {cancellation_policy}.",
            "priority": 55,
        },
    ],
}

def all_default_rules() -> list[dict]:
    return [*DEFAULT_RULES["common"], *DEFAULT_RULES["sales"], *DEFAULT_RULES["reservations"]]
