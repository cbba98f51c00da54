SETTINGS_COLLECTION = "settings"
SETTINGS_DOCUMENT = "main"
EMOTES_COLLECTION = "emotes"

# Object keys are "emotes/<epoch millis>_<original filename>".
EMOTES_STORAGE_PREFIX = "emotes"

AD_LINK_FIELD = "adLink"
CREATED_AT_FIELD = "createdAt"
