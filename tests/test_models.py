from llmapi.models import (
    FineTuneModelDeleteResponse,
    Model,
    ModelsList,
    Permission,
    delete_fine_tune_model,
    get_model,
    list_models,
)
from llmapi.request import HttpMethod


def test_list_models_request():
    request = list_models()
    assert request.method is HttpMethod.GET
    assert request.url_suffix() == "/models"


def test_get_model_request():
    request = get_model("text-davinci-003")
    assert request.method is HttpMethod.GET
    assert request.url_suffix() == "/models/text-davinci-003"


def test_delete_fine_tune_model_request():
    request = delete_fine_tune_model("fine-tune-model-id")
    assert request.method is HttpMethod.DELETE
    assert request.url_suffix() == "/models/fine-tune-model-id"


def test_empty_models_list_from_dict():
    assert ModelsList.from_dict({"data": None}).models == []


def test_empty_model_from_dict():
    model = Model.from_dict(
        {
            "created": 0,
            "id": "",
            "object": "",
            "owned_by": "",
            "permission": None,
            "root": "",
            "parent": "",
        }
    )
    assert model == Model()


def test_model_with_permission_from_dict():
    model = Model.from_dict(
        {
            "created": 1669599635,
            "id": "text-davinci-003",
            "object": "model",
            "owned_by": "openai-internal",
            "permission": [
                {
                    "created": 1669599635,
                    "id": "modelperm-1",
                    "object": "model_permission",
                    "allow_sampling": True,
                    "allow_view": True,
                    "organization": "*",
                    "group": None,
                }
            ],
            "root": "text-davinci-003",
            "parent": None,
        }
    )
    assert model.created_at == 1669599635
    assert model.owned_by == "openai-internal"
    assert model.parent == ""
    assert model.permission == [
        Permission(
            created_at=1669599635,
            id="modelperm-1",
            object="model_permission",
            allow_sampling=True,
            allow_view=True,
            organization="*",
        )
    ]


def test_models_list_from_dict():
    models = ModelsList.from_dict({"data": [{"id": "a"}, {"id": "b"}]})
    assert [m.id for m in models.models] == ["a", "b"]


def test_delete_response_from_dict():
    response = FineTuneModelDeleteResponse.from_dict(
        {"id": "fine-tune-model-id", "object": "model", "deleted": True}
    )
    assert response == FineTuneModelDeleteResponse("fine-tune-model-id", "model", True)