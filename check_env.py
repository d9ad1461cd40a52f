from tonelens.settings import get_settings
settings = get_settings()
def mask(s):
    return (s[:4] + "..." + s[-4:]) if s else None
print("TONE URL   :", settings.TONE_ANALYZER_URL)
print("TONE KEY   :", mask(settings.TONE_ANALYZER_APIKEY))
print("DEEPAI KEY :", mask(settings.DEEPAI_APIKEY))
print("OPENAI KEY :", mask(settings.OPENAI_API_KEY))
print("OPENAI URL :", settings.OPENAI_BASE_URL)
print("MODEL      :", settings.OPENAI_MODEL)
