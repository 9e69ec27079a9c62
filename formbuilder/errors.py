"""Domain errors raised by the form builder core."""


class FormBuilderError(ValueError):
    """Base class for errors the API reports as unprocessable input."""


class UnknownBlockType(FormBuilderError):
    def __init__(self, type_tag):
        self.type_tag = type_tag
        super().__init__(f'Unknown block type: {type_tag!r}')


class UnknownInteractionType(FormBuilderError):
    def __init__(self, type_tag):
        self.type_tag = type_tag
        super().__init__(f'Unknown interaction type: {type_tag!r}')


class InteractionTypeNotAccepted(FormBuilderError):
    def __init__(self, block_type, interaction_type):
        self.block_type = block_type
        self.interaction_type = interaction_type
        super().__init__(f'Block type {block_type!r} does not accept {interaction_type!r} interactions')


class InvalidOptionValue(FormBuilderError):
    def __init__(self, key, value):
        self.key = key
        self.value = value
        super().__init__(f'Option {key!r} must be a scalar, got {type(value).__name__}')


class DuplicateInteractionUuid(FormBuilderError):
    def __init__(self, uuid):
        self.uuid = uuid
        super().__init__(f'Another interaction on this block already uses the id {uuid!r}')


class BlockNotActionable(FormBuilderError):
    def __init__(self, block_type):
        self.block_type = block_type
        super().__init__(f'Blocks of type {block_type!r} do not take answers')
