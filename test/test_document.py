from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pytest

from pydantic import BaseModel, ConfigDict, Field

from yamlstream import DecodeError, Document, UsageError, read_file
from yamlstream.document import is_destination


@dataclass
class ObjectMeta:
    name: str = ""
    namespace: Optional[str] = None
    labels: Dict[str, str] = field(default_factory=dict)


@dataclass
class DeploymentSpec:
    replicas: int = 1


@dataclass
class Deployment:
    api_version: str = field(default="", metadata={"yaml": "apiVersion"})
    kind: str = ""
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: DeploymentSpec = field(default_factory=DeploymentSpec)


@dataclass
class Flat:
    kind: str = ""
    metadata: str = ""


@dataclass(frozen=True)
class Frozen:
    kind: str = ""


class ServicePort(BaseModel):
    port: int


class ServiceSpec(BaseModel):
    ports: List[ServicePort] = Field(default_factory=list)


class ServiceMeta(BaseModel):
    name: str = ""
    namespace: str = "default"


class Service(BaseModel):
    api_version: str = Field("", alias="apiVersion")
    kind: str = ""
    metadata: ServiceMeta = Field(default_factory=ServiceMeta)
    spec: ServiceSpec = Field(default_factory=ServiceSpec)


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str = ""


class TestDocument:
    def test_defaults(self):
        document = Document()

        assert document.data == {}
        assert document.raw == ""
        assert document.index == 0

    def test_bytes_adds_delimiter(self):
        document = Document({"hello": "world"}, raw="hello: world\n")

        assert document.to_bytes() == b"---\nhello: world\n"
        assert bytes(document) == document.to_bytes()
        assert str(document) == "---\nhello: world\n"
        assert document.raw_bytes() == b"hello: world\n"

    def test_bytes_keeps_key_order(self):
        assert str(Document({"kind": "Pod", "apiVersion": "v1"})) == "---\nkind: Pod\napiVersion: v1\n"

    def test_bytes_unicode(self):
        assert str(Document({"name": "café"})) == "---\nname: café\n"
        assert Document({"name": "café"}).to_bytes() == "---\nname: café\n".encode("utf-8")

    def test_bytes_unrepresentable_is_a_fault(self):
        with pytest.raises(RuntimeError, match="unable to re-encode document 4"):
            Document({"thing": object()}, index=4).to_bytes()

    def test_data_is_a_copy(self):
        document = Document({"items": [1, 2]})

        document.data["items"].append(3)

        assert document.data == {"items": [1, 2]}


class TestUnmarshal:
    @pytest.mark.parametrize(
        "destination,expected",
        [
            ({}, True),
            (Deployment(), True),
            (Service(), True),
            (Deployment, False),
            (Frozen(), False),
            (FrozenModel(), False),
            ([], False),
            ((), False),
            (1, False),
            ("text", False),
            (None, False),
        ],
    )
    def test_is_destination(self, destination, expected):
        assert is_destination(destination) is expected

    def test_into_dict(self):
        dest = {"existing": True}

        Document({"stream_number": 1}).unmarshal(dest)

        assert dest == {"existing": True, "stream_number": 1}

    def test_empty_document(self):
        dest = Deployment(kind="Pod")

        Document().unmarshal(dest)

        assert dest == Deployment(kind="Pod")

    def test_non_pointer_is_left_alone(self):
        dest = Frozen(kind="Pod")

        with pytest.raises(UsageError, match="expected pointer for destination"):
            Document({"kind": "Deployment"}).unmarshal(dest)

        assert dest.kind == "Pod"

    def test_nested_dataclass(self, bundle_yaml):
        dest = Deployment()

        read_file(bundle_yaml).get_unmarshal(1, dest)

        assert dest.api_version == "apps/v1"
        assert dest.kind == "Deployment"
        assert dest.metadata.name == "web"
        assert dest.metadata.namespace == "shop"
        assert dest.metadata.labels == {"app": "web"}
        assert dest.spec.replicas == 3

    def test_nested_record_filled_in_place(self, bundle_yaml):
        metadata = ObjectMeta(labels={"keep": "me"})
        dest = Deployment(metadata=metadata)

        read_file(bundle_yaml).get_unmarshal(0, dest)

        assert dest.metadata is metadata
        assert metadata.name == "shop"
        assert metadata.namespace is None
        assert metadata.labels == {"keep": "me"}

    def test_pydantic_model(self, bundle_yaml):
        dest = Service()

        read_file(bundle_yaml).get_unmarshal(2, dest)

        assert dest.api_version == "v1"
        assert dest.kind == "Service"
        assert dest.metadata.name == "web"
        assert dest.metadata.namespace == "shop"
        assert dest.spec.ports == [ServicePort(port=80)]

    def test_shape_mismatch(self, bundle_yaml):
        dest = Flat()

        with pytest.raises(DecodeError, match="unable to decode field 'metadata'"):
            read_file(bundle_yaml).get_unmarshal(1, dest)

        # kind comes before metadata in the document but was not written either
        assert dest == Flat()

    def test_nested_shape_mismatch(self):
        dest = Deployment()

        with pytest.raises(DecodeError, match="unable to decode field 'spec.replicas'"):
            Document({"kind": "Deployment", "spec": {"replicas": "many"}}).unmarshal(dest)

        assert dest == Deployment()

    def test_numbers_into_strings(self, stream):
        dest = ObjectMeta()

        stream("name: 1.20\nlabels:\n  version: 2\n").get_unmarshal(0, dest)

        assert dest.name == "1.2"
        assert dest.labels == {"version": "2"}

    def test_numbers_into_model_strings(self):
        dest = ServiceMeta()

        Document({"name": 42, "namespace": 7}).unmarshal(dest)

        assert dest.name == "42"
        assert dest.namespace == "7"

    def test_mapping_expected_for_record(self):
        with pytest.raises(DecodeError, match="cannot decode list into ObjectMeta"):
            Document({"metadata": ["a", "b"]}).unmarshal(Deployment())
