import logging
from typing import List


logger = logging.getLogger(__name__)


def get_root_from_chunk(instance):
    while instance.father is not None:
        instance = instance.father

    return instance


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Simple(Chunk):
            length = fields.StructField('I')
            data = fields.StringField(Dependency('.length'))

    and have the (internal) length of the string contained in the field named 'data'
    strictly connected to the field named 'length': unpacking reads as many bytes as
    'length' says, setting a new value on 'data' writes its size back into 'length'.

    The syntax for the expression is inspired from module resolution:

     - '.length' refers to a field at the same level
     - 'header.length' starts the resolution from the root chunk
    '''
    def __init__(self, expression: str):
        self.expression = expression

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        fields_path: List[str] = self.expression.split('.')
        # '.length'.split(".") -> ['', 'length']
        # 'length'.split(".") -> ['length']

        if fields_path[0] == '':
            field = instance.father
            fields_path = fields_path[1:]
        else:
            field = get_root_from_chunk(instance)

        if field is None:
            raise AttributeError(f"cannot resolve '{self.expression}' for a field without father")

        for component_name in fields_path:
            field = getattr(field, component_name)

        logger.debug('resolved \'%s\' as field %s', self.expression, field.__class__.__name__)

        return field

    def resolve(self, instance):
        '''Resolve the value of the attribute with respect to the instance
        passed as argument.'''
        return self.resolve_field(instance).value

    def resolve_and_set(self, instance, value):
        self.resolve_field(instance).value = value
