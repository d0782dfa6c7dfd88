import logging

import gradio as gr

from json_csv_flattener.handlers import (
    clear_handler,
    convert_handler,
    load_json_file,
    validate_handler,
)

EXAMPLE_JSON = """[
  {"name": "Carlos", "age": 42, "children": [{"name": "Lucas"}, {"name": "Maria"}]},
  {"name": "Ana", "age": 35, "hobbies": ["football", "reading"]}
]"""

# --- UI Definition ---
with gr.Blocks(title="JSON to CSV Flattener") as demo:
    gr.Markdown("# JSON to CSV Flattener")
    gr.Markdown(
        "Paste or upload a JSON object or array of objects. Nested objects become "
        "dot-path columns, arrays of objects become one row per element."
    )

    with gr.Row():
        # Left Panel: Input
        with gr.Column(scale=1):
            gr.Markdown("### 1. Input")
            file_input = gr.File(label="Upload JSON File", file_types=[".json"])
            json_input = gr.Textbox(
                label="JSON",
                lines=18,
                max_lines=40,
                placeholder=EXAMPLE_JSON,
            )
            mask_checkbox = gr.Checkbox(label="Mask sensitive fields (passwords, tokens, ...)", value=False)
            with gr.Row():
                validate_btn = gr.Button("Validate")
                clear_btn = gr.Button("Clear")

        # Right Panel: Output
        with gr.Column(scale=1):
            gr.Markdown("### 2. Convert")
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="output")
            convert_btn = gr.Button("Convert to CSV", variant="primary")
            status_msg = gr.Textbox(label="Status", interactive=False)
            download_output = gr.File(label="Download CSV")
            preview = gr.JSON(label="Preview (first 3 rows)")

    file_input.upload(
        fn=load_json_file,
        inputs=[file_input],
        outputs=[json_input, status_msg],
    )

    validate_btn.click(
        fn=validate_handler,
        inputs=[json_input],
        outputs=[status_msg],
    )

    convert_btn.click(
        fn=convert_handler,
        inputs=[json_input, mask_checkbox, output_filename],
        outputs=[download_output, status_msg, preview],
    )

    clear_btn.click(
        fn=clear_handler,
        inputs=[],
        outputs=[json_input, status_msg, download_output, preview],
    )

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    demo.launch()
