"""Type mapping from descriptor types to JNI C types"""

from typing import Optional

from .types import ArrayType, ClassType, JavaType, PrimitiveType

STRING_CLASS = 'java/lang/String'


class TypeMapper:
    """Maps parsed Java types to the C types used in JNI exports"""

    PRIMITIVE_TYPES = {
        'Z': 'jboolean',
        'B': 'jbyte',
        'C': 'jchar',
        'S': 'jshort',
        'I': 'jint',
        'J': 'jlong',
        'F': 'jfloat',
        'D': 'jdouble',
    }

    ENV_TYPE = 'JNIEnv*'
    CLASS_TYPE = 'jclass'
    STRING_TYPE = 'jstring'
    OBJECT_TYPE = 'jobject'
    # TODO: use jintArray, jobjectArray etc. once callers need the element type
    ARRAY_TYPE = 'jarray'

    @classmethod
    def to_jni(cls, java_type: JavaType) -> str:
        """Convert a Java type to its JNI C type"""
        if isinstance(java_type, PrimitiveType):
            return cls.PRIMITIVE_TYPES[java_type.code]
        if isinstance(java_type, ClassType):
            return cls.STRING_TYPE if cls.is_string(java_type) else cls.OBJECT_TYPE
        if isinstance(java_type, ArrayType):
            return cls.ARRAY_TYPE
        raise TypeError(f"Unsupported Java type: {java_type!r}")

    @classmethod
    def return_to_jni(cls, java_type: Optional[JavaType]) -> Optional[str]:
        """Convert a return type; None (void) stays None"""
        if java_type is None:
            return None
        return cls.to_jni(java_type)

    @classmethod
    def is_string(cls, java_type: JavaType) -> bool:
        return isinstance(java_type, ClassType) and java_type.name == STRING_CLASS
