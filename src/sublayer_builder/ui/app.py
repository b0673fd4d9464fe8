from __future__ import annotations

import logging
import tempfile
from functools import partial
from pathlib import Path

import gradio as gr

from sublayer_builder.settings import Settings
from sublayer_builder.sublayer.editor import default_config
from sublayer_builder.sublayer.hyper_editor import HYPER_KEYS, MODIFIER_KEYS
from sublayer_builder.sublayer.model import HyperKeyConfig

from . import handlers

logger = logging.getLogger(__name__)


def build_app(settings: Settings) -> gr.Blocks:
    export_dir = settings.export_dir or Path(tempfile.mkdtemp(prefix="sublayer-builder-"))
    initial = default_config(settings.default_sublayer_char)
    initial_json, initial_size = handlers.preview(initial)

    with gr.Blocks(title="Karabiner Hyper Sublayer Builder") as demo:
        gr.Markdown("# Karabiner Elements Configuration Builder")
        gr.Markdown('Create and edit Hyper Key and sublayer configurations (e.g. HyperKey + o + f = "Open Finder").')

        config_state = gr.State(value=initial)
        hyper_state = gr.State(value=HyperKeyConfig())

        with gr.Tab("Sublayer"):
            with gr.Row():
                # Left Panel: form
                with gr.Column(scale=1):
                    gr.Markdown("### Sublayer")
                    sublayer_char = gr.Textbox(label="Sublayer Character", value=initial.sublayer_char, max_lines=1)
                    description = gr.Textbox(label="Description", value=initial.description, max_lines=1)

                    gr.Markdown("### Actions")
                    actions_table = gr.Dataframe(
                        headers=handlers.ACTION_HEADERS,
                        datatype=["str", "str", "str"],
                        col_count=(len(handlers.ACTION_HEADERS), "fixed"),
                        value=handlers.action_rows(initial),
                        type="array",
                        interactive=True,
                        label="Key -> shell command",
                    )
                    with gr.Row():
                        add_btn = gr.Button("Add Action")
                        clear_btn = gr.Button("Clear All")
                    with gr.Row():
                        delete_row = gr.Number(label="Row to delete", value=1, precision=0, minimum=1)
                        delete_btn = gr.Button("Delete Action")

                # Right Panel: preview, export, import
                with gr.Column(scale=1):
                    gr.Markdown("### JSON Preview")
                    json_preview = gr.Code(value=initial_json, language="json", label="Karabiner rule", interactive=False)
                    json_size = gr.Textbox(label="Size", value=initial_size, interactive=False)
                    export_btn = gr.Button("Export JSON", variant="primary")
                    download = gr.File(label="Download")

                    gr.Markdown("### Import")
                    import_text = gr.Textbox(label="Paste Karabiner rule JSON", lines=8)
                    import_status = gr.Markdown()

        with gr.Tab("Hyper Key"):
            with gr.Row():
                with gr.Column(scale=1):
                    hyper_description = gr.Textbox(label="Description *", max_lines=1)
                    hyper_key = gr.Dropdown(label="Hyper Key *", choices=HYPER_KEYS, value=None)
                    hyper_variable = gr.Textbox(label="Set Variable", value="hyper", max_lines=1)
                    hyper_modifiers = gr.CheckboxGroup(label="Send Modifiers", choices=MODIFIER_KEYS, value=[])
                    hyper_alone = gr.Textbox(label="Key code if pressed alone", max_lines=1)
                with gr.Column(scale=1):
                    hyper_preview = gr.Code(language="json", label="Hyper Key rule", interactive=False)
                    hyper_status = gr.Markdown(handlers.HYPER_MISSING)
                    hyper_export_btn = gr.Button("Export JSON", variant="primary")
                    hyper_download = gr.File(label="Download")

        # Sublayer events
        table_outputs = [config_state, actions_table, json_preview, json_size]

        sublayer_char.input(
            fn=handlers.on_sublayer_char,
            inputs=[config_state, sublayer_char],
            outputs=[config_state, sublayer_char, description, json_preview, json_size],
        )
        description.input(
            fn=handlers.on_description,
            inputs=[config_state, description],
            outputs=[config_state, json_preview, json_size],
        )
        actions_table.input(
            fn=handlers.on_actions_table,
            inputs=[config_state, actions_table],
            outputs=table_outputs,
        )
        add_btn.click(fn=handlers.on_add_action, inputs=[config_state], outputs=table_outputs)
        clear_btn.click(fn=handlers.on_clear_actions, inputs=[config_state], outputs=table_outputs)
        delete_btn.click(
            fn=handlers.on_delete_action,
            inputs=[config_state, delete_row],
            outputs=table_outputs,
        )
        export_btn.click(
            fn=partial(handlers.on_export, export_dir=export_dir),
            inputs=[config_state],
            outputs=[download],
        )
        import_text.input(
            fn=handlers.on_import,
            inputs=[config_state, import_text],
            outputs=[
                config_state,
                sublayer_char,
                description,
                actions_table,
                json_preview,
                json_size,
                import_status,
            ],
        )

        # Hyper key events
        hyper_description.input(
            fn=handlers.on_hyper_description,
            inputs=[hyper_state, hyper_description],
            outputs=[hyper_state, hyper_description, hyper_preview, hyper_status],
        )
        hyper_key.input(
            fn=handlers.on_hyper_key,
            inputs=[hyper_state, hyper_key],
            outputs=[hyper_state, hyper_modifiers, hyper_preview, hyper_status],
        )
        hyper_variable.input(
            fn=handlers.on_hyper_variable,
            inputs=[hyper_state, hyper_variable],
            outputs=[hyper_state, hyper_variable, hyper_preview, hyper_status],
        )
        hyper_modifiers.input(
            fn=handlers.on_hyper_modifiers,
            inputs=[hyper_state, hyper_modifiers],
            outputs=[hyper_state, hyper_modifiers, hyper_preview, hyper_status],
        )
        hyper_alone.input(
            fn=handlers.on_hyper_alone,
            inputs=[hyper_state, hyper_alone],
            outputs=[hyper_state, hyper_alone, hyper_preview, hyper_status],
        )
        hyper_export_btn.click(
            fn=partial(handlers.on_hyper_export, export_dir=export_dir),
            inputs=[hyper_state],
            outputs=[hyper_download, hyper_status],
        )

    logger.debug("exports will be written to %s", export_dir)
    return demo


def launch(settings: Settings) -> None:
    demo = build_app(settings)
    logger.info("serving on http://%s:%d", settings.server_name, settings.server_port)
    demo.launch(server_name=settings.server_name, server_port=settings.server_port)
