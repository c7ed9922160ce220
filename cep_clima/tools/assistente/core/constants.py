"""
Vocabulários e padrões usados pelos extratores do assistente.
"""

# Unidades federativas aceitas como estado
BRAZILIAN_STATES = frozenset(
    {
        "AC", "AL", "AP", "AM", "BA", "CE", "DF", "ES", "GO",
        "MA", "MT", "MS", "MG", "PA", "PB", "PR", "PE", "PI",
        "RJ", "RN", "RS", "RO", "RR", "SC", "SP", "SE", "TO",
    }
)

# Palavras de clima/tempo (comparação por substring, sem diferenciar caixa)
WEATHER_KEYWORDS = (
    "previsão",
    "previsao",
    "previsões",
    "previsoes",
    "tempo",
    "clima",
    "temperatura",
    "chuva",
    "chover",
    "chovendo",
    "chuvoso",
    "chuvosa",
    "nublado",
    "nublada",
    "ensolarado",
    "ensolarada",
    "fazer sol",
    "fazendo sol",
    "ventania",
    "ventando",
    "umidade",
    "calor",
    "quente",
    "frio",
    "fria",
    "gelado",
    "gelada",
    "garoa",
    "tempestade",
    "weather",
    "forecast",
)

# Palavras de CEP/endereço (português e inglês)
ZIPCODE_KEYWORDS = (
    "cep",
    "endereço",
    "endereco",
    "rua",
    "avenida",
    "bairro",
    "cidade",
    "estado",
    "localização",
    "localizacao",
    "local",
    "zip",
    "postal",
    "code",
    "address",
    "street",
    "avenue",
    "neighborhood",
    "city",
    "state",
    "location",
)

# Subconjunto usado para descartar candidatos a cidade
ZIPCODE_CANDIDATE_BLOCKLIST = ("cep", "zip", "postal", "code")

# Pedido explícito de CEP sem código válido
ZIPCODE_REQUEST_KEYWORDS = ("cep", "código postal", "codigo postal", "endereço", "endereco")

# Frases que indicam uso do local da conversa anterior
CONTEXTUAL_WEATHER_PATTERNS = (
    "previsão",
    "previsao",
    "tempo",
    "clima",
    "temperatura",
    "qual a previsão",
    "qual o tempo",
    "qual o clima",
    "como está o tempo",
    "como está o clima",
    "qual a temperatura",
    "vai chover",
    "vai fazer sol",
    "como vai estar",
    "como tá",
    "como está",
    "está chovendo",
    "está fazendo sol",
    "tá chovendo",
    "tá fazendo sol",
    "lá",
    "aí",
    "essa cidade",
    "nessa cidade",
)

# Palavras que nunca fazem parte de um nome de cidade.
# "de", "do", "da", "dos" e "das" ficam de fora (Rio de Janeiro, Foz do Iguaçu).
NON_CITY_WORDS = frozenset(
    {
        # artigos, preposições e conectivos
        "a", "o", "as", "os", "um", "uma", "e", "ou",
        "em", "no", "na", "nos", "nas", "para", "pra", "pro", "por", "pelo",
        "pela", "com", "sem", "sobre", "até", "ate",
        # perguntas e verbos comuns
        "qual", "quais", "como", "quando", "onde", "que", "quê",
        "está", "esta", "estão", "tá", "ta", "vai", "vou", "é", "ser", "fica",
        "quero", "queria", "gostaria", "saber", "ver", "mostre", "mostrar",
        "diga", "informe", "consultar", "consulte", "buscar", "busque",
        "me", "meu", "minha", "você", "voce", "favor",
        # tempo e datas
        "hoje", "amanhã", "amanha", "agora", "semana", "dias", "fim",
        # clima
        "tempo", "clima", "previsão", "previsao", "previsões", "previsoes",
        "temperatura", "chuva", "chover", "chovendo", "sol", "calor", "frio",
        "nublado", "umidade", "weather", "forecast",
        # endereço
        "cep", "endereço", "endereco", "rua", "avenida", "bairro", "cidade",
        "estado", "zip", "code", "postal", "número", "numero",
        # contexto e saudações
        "lá", "aí", "essa", "nessa", "nesta", "dessa", "daqui", "aqui",
        "oi", "olá", "ola", "obrigado", "obrigada", "tchau",
    }
)

# Limite de cidades apresentadas para escolha
MAX_CITY_CHOICES = 5
