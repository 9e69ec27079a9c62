import enum


class FormBlockType(str, enum.Enum):
    none = 'none'
    consent = 'consent'
    checkbox = 'checkbox'
    radio = 'radio'
    long = 'input-long'
    short = 'input-short'
    email = 'input-email'
    link = 'input-link'
    number = 'input-number'
    phone = 'input-phone'


class FormBlockInteractionType(str, enum.Enum):
    button = 'button'
    consent = 'consent'
    checkbox = 'checkbox'
    radio = 'radio'
    input = 'input'
    textarea = 'textarea'
