"""Reference documents ("prompt files") offered for a document type."""

from typing import Optional

from pydantic import BaseModel


class PromptFile(BaseModel):
    key: str
    label: str
    content: str


class SelectedPromptFile(BaseModel):
    handle: str
    name: Optional[str] = None
    content: Optional[str] = None


def to_select_options(prompt_files):
    return [(f.key, f.label) for f in prompt_files.values()]


def get_content(prompt_files, handle):
    file = prompt_files.get(handle)
    return file.content if file else None


def get_name(prompt_files, handle):
    file = prompt_files.get(handle)
    return file.label if file else None


def has_prompt_files(prompt_files):
    return len(prompt_files) > 0


def get_single_prompt_file(prompt_files):
    if len(prompt_files) != 1:
        return None
    handle, file = next(iter(prompt_files.items()))
    return SelectedPromptFile(handle=handle, name=file.label, content=file.content)


def prepare_for_submission(form_data, prompt_files, prompt_file_fields, auto_attach_single=True):
    """
    Collect the reference documents selected in ``prompt_file_fields``.

    When nothing was selected and exactly one document exists, it is attached
    under ``procedureType``.
    """
    selected = {}
    for field_id in prompt_file_fields:
        handle = form_data.get(field_id)
        if handle and handle in prompt_files:
            file = prompt_files[handle]
            selected[field_id] = SelectedPromptFile(
                handle=handle, name=file.label, content=file.content
            )

    if auto_attach_single and not selected:
        single = get_single_prompt_file(prompt_files)
        if single:
            selected["procedureType"] = single

    return selected
