"""
Pytest configuration and fixtures
"""

import pytest

from jni_peer_generator.models import (
    DOUBLE,
    INT,
    STRING,
    ManagedClass,
    Method,
    Parameter,
)


CAR_MODEL = """
<peers>
    <class name="com.jnitest.Car" namespace="JNI.Test">
        <field name="mName" type="String"/>
        <field name="mCost" type="double"/>
        <field name="mWheels" type="int"/>
        <method name="getCost" returns="double" tagged="true"/>
        <method name="setCost" tagged="true">
            <param name="cost" type="double"/>
        </method>
        <method name="getWheels" returns="int"/>
        <method name="getName" returns="String" tagged="true"/>
        <method name="getCount" returns="int" static="true" tagged="true"/>
    </class>
</peers>
"""


@pytest.fixture
def car_class():
    """The Car example: two instance methods, a static one and an untagged one"""
    return ManagedClass(
        qualified_name="com.jnitest.Car",
        simple_name="Car",
        namespace=("JNI", "Test"),
        methods=(
            Method("getCost", DOUBLE, is_tagged=True),
            Method("setCost", parameters=(Parameter("cost", DOUBLE),), is_tagged=True),
            Method("getWheels", INT),
            Method("getName", STRING, is_tagged=True),
            Method("getCount", INT, is_static=True, is_tagged=True),
        ),
    )


@pytest.fixture
def empty_class():
    """A tagged class without tagged methods"""
    return ManagedClass(
        qualified_name="com.example.Empty",
        simple_name="Empty",
        namespace=("Peers",),
        methods=(Method("ignored", INT),),
    )


@pytest.fixture
def car_model_file(tmp_path):
    """XML model file describing the Car example"""
    path = tmp_path / "model.xml"
    path.write_text(CAR_MODEL)
    return path
