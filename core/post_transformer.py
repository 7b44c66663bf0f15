"""Turn the job post form scraped from an edit page into a create payload.

The ``POST /plans/<job>/jobapps`` endpoint is strict about the shape it
accepts: nested blocks of the edit form must arrive as ``*_attributes``
keys, questions must lose their ids, and the first location is always free
text. Every function here builds new dictionaries and leaves the scraped
form untouched, so the same form can be replayed for many locations.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List, Mapping, Optional

from core.errors import GeocodingError, PayloadError

JSONDocument = Dict[str, Any]

FREE_TEXT_LOCATION_TYPE = {"id": 1, "name": "Free Text", "key": "FREE_TEXT"}
INDEED_SOURCE_KEY = "INDEED"

# Nested form blocks and the key the create endpoint expects for each.
FLATTENED_BLOCKS = (
    ("job_board_feed_settings", "job_board_feed_settings_attributes"),
    ("job_board_feed_location", "job_board_feed_location_attributes"),
    ("job_post_education_config", "job_post_education_config_attributes"),
    ("questions", "questions_attributes"),
)
LINKED_FIELD_IDENTITY_KEYS = ("id", "question_id", "name")


def _require(document: Mapping[str, Any], key: str, where: str) -> Any:
    if not isinstance(document, Mapping) or key not in document or document[key] is None:
        raise PayloadError(f"Job post form is missing '{key}' in {where}")
    return document[key]


def _renamed(document: Mapping[str, Any], old_key: str, new_key: str) -> JSONDocument:
    """Copy of ``document`` with ``old_key`` moved to ``new_key``."""
    renamed = {key: value for key, value in document.items() if key != old_key}
    renamed[new_key] = document[old_key]
    return renamed


def transform_question(question: Mapping[str, Any]) -> JSONDocument:
    answer_type = _require(question, "answer_type", "question")
    transformed = {
        key: value
        for key, value in question.items()
        if key not in ("answer_type", "linked_candidate_field")
    }
    transformed["answer_type_key"] = _require(answer_type, "key", "question answer_type")
    transformed["id"] = None

    options = question.get("question_options")
    if options:
        del transformed["question_options"]
        labels = [_require(option, "label", "question option") for option in options]
        transformed["question_options_text"] = "\n".join(labels)

    linked_field = question.get("linked_candidate_field")
    if linked_field:
        transformed["linked_candidate_field_attributes"] = {
            key: value for key, value in linked_field.items() if key not in LINKED_FIELD_IDENTITY_KEYS
        }
    return transformed


def transform_questions(questions: Iterable[Mapping[str, Any]]) -> Dict[str, JSONDocument]:
    """Questions as the index-keyed object (``{"0": ..., "1": ...}``) the endpoint expects."""
    return {str(index): transform_question(question) for index, question in enumerate(questions)}


def free_text_location(location_entry: Mapping[str, Any], target_location: str) -> JSONDocument:
    entry = dict(location_entry)
    entry["text_value"] = target_location
    location_type = entry.get("job_post_location_type") or {}
    if location_type.get("key") != FREE_TEXT_LOCATION_TYPE["key"]:
        entry["job_post_location_type"] = dict(FREE_TEXT_LOCATION_TYPE)
    entry["custom_location"] = None
    return entry


def indeed_feed_settings(feed_settings: Iterable[Mapping[str, Any]]) -> List[JSONDocument]:
    return [
        {
            "id": None,
            "source_id": setting.get("source_id"),
            "include_in_feed": setting.get("include_in_feed"),
        }
        for setting in feed_settings
        if setting.get("source_key") == INDEED_SOURCE_KEY
    ]


def build_creation_payload(
    raw_form: Mapping[str, Any],
    target_location: str,
    target_board_id: int,
    source_post_id: int,
    source_post_name: str,
    filtered_attributes: Iterable[str],
    location_info: Mapping[str, Any],
    usa_cities: Iterable[str],
) -> JSONDocument:
    """Build the body of ``POST /plans/<job>/jobapps`` for one target location.

    ``raw_form`` is the parsed ``data-react-props`` of the ``JobPostsForm``
    component; ``location_info`` is the geocoded feed location for
    ``target_location`` (see ``normalize_geocoding_result``).
    """
    source = _require(raw_form, "job_application", "the form properties")
    application: JSONDocument = copy.deepcopy(dict(source))

    for old_key, new_key in FLATTENED_BLOCKS:
        _require(application, old_key, "job_application")
        application = _renamed(application, old_key, new_key)

    application["questions_attributes"] = transform_questions(application["questions_attributes"])

    locations = _require(application, "job_post_locations", "job_application")
    if not locations:
        raise PayloadError("Job post form has an empty 'job_post_locations' list")
    application["job_post_locations"] = [free_text_location(locations[0], target_location), *locations[1:]]

    application["title"] = source_post_name
    application["enable_eeoc"] = target_location in set(usa_cities)

    application["job_board_feed_settings_attributes"] = indeed_feed_settings(
        application["job_board_feed_settings_attributes"]
    )
    application["job_board_feed_location_attributes"] = dict(location_info)

    education_config = dict(application["job_post_education_config_attributes"])
    education_config["id"] = None
    application["job_post_education_config_attributes"] = education_config

    for attribute in filtered_attributes:
        application.pop(attribute, None)

    return {
        "external_or_internal_greenhouse_job_board_id": target_board_id,
        "greenhouse_job_application": application,
        "template_application_id": source_post_id,
    }


def geocoding_query(location: str) -> str:
    """Drop the leading qualifier (``"Home based - EMEA"``) from a post location."""
    parts = [part.strip() for part in location.split(",")]
    remainder = [part for part in parts[1:] if part]
    return ", ".join(remainder)


def normalize_geocoding_result(response: Optional[Mapping[str, Any]], query: str) -> JSONDocument:
    """Feed location block built from the first Mapbox feature.

    Country names come from the feature's ``country`` context entry, or from
    the feature itself when it is a country.
    """
    if not response:
        raise GeocodingError(f"Failed to retrieve location information for {query}.")
    features = response.get("features") or []
    if not features:
        raise GeocodingError(f"Location information cannot be found for {query}.")
    feature = features[0]

    country = next(
        (entry for entry in feature.get("context") or [] if "country" in str(entry.get("id", ""))),
        None,
    )
    try:
        if country:
            country_info = {
                "country_long_name": country["text"],
                "country_short_name": country["short_code"].upper(),
            }
        else:
            country_info = {
                "country_long_name": feature["text"],
                "country_short_name": feature["properties"]["short_code"].upper(),
            }
        longitude, latitude = feature["center"][0], feature["center"][1]
        return {
            "city": feature["text"],
            **country_info,
            "latitude": latitude,
            "location": feature["place_name"],
            "longitude": longitude,
            "state_long_name": feature["text"],
            "state_short_name": "",
            "allow_remote": True,
            "county": "",
        }
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        raise GeocodingError(f"Unexpected geocoding result for {query}: {exc}") from exc
