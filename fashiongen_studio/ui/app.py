"""Gradio UI application for FashionGen Studio"""

import logging
import gradio as gr
from typing import Optional
from PIL import Image

from ..core import (
    AspectRatio,
    ImageResolution,
    ReferenceImages,
    FashionImageService,
    AssistantConversation,
)
from ..utils import image_to_data_uri, data_uri_to_image, save_conversation, save_generated_image
from ..config import get_settings

logger = logging.getLogger(__name__)

MODEL_CHOICES = [
    ("Nano Banana (Gemini 2.5 Flash)", "2.5"),
    ("Nano Banana Pro (Gemini 3 Pro)", "3"),
]


def _to_data_uri(image: Optional[Image.Image]) -> Optional[str]:
    if image is None:
        return None
    return image_to_data_uri(image)


def create_app():
    """Create and configure the Gradio application"""

    settings = get_settings()

    # Initialize components
    service = FashionImageService()

    with gr.Blocks(title="FashionGen Studio", theme=gr.themes.Soft()) as app:

        # Header
        gr.Markdown("""
        # 👗 FashionGen Studio
        ### AI fashion campaigns with Google Gemini

        **Features:**
        - 🎨 Generate images from product, model and scene references
        - ✏️ Edit images with an optional sketch/mask
        - 🔍 Catalog descriptions from garment photos
        - 💬 Fashion Director assistant
        """)

        # Last generated/edited image, as a data-URI
        last_image = gr.State(None)
        conversation = gr.State(None)

        with gr.Tabs():
            with gr.Tab("🎨 Generate"):
                with gr.Row():
                    with gr.Column(scale=1):
                        gen_prompt = gr.Textbox(
                            label="Prompt",
                            placeholder="Editorial shot of a red silk evening dress...",
                            lines=4
                        )
                        model_version = gr.Radio(
                            choices=MODEL_CHOICES,
                            value="2.5",
                            label="Model"
                        )
                        with gr.Row():
                            aspect_ratio = gr.Dropdown(
                                choices=[r.value for r in AspectRatio],
                                value=AspectRatio.PORTRAIT_3_4.value,
                                label="Aspect ratio"
                            )
                            resolution = gr.Dropdown(
                                choices=[r.value for r in ImageResolution],
                                value=ImageResolution.RES_1K.value,
                                label="Resolution",
                                info="Gemini 3 Pro only"
                            )
                        with gr.Row():
                            product_ref = gr.Image(label="Product", type="pil")
                            model_ref = gr.Image(label="Model", type="pil")
                            background_ref = gr.Image(label="Background", type="pil")
                        generate_btn = gr.Button("🎨 Generate", variant="primary")
                    with gr.Column(scale=1):
                        gen_output = gr.Image(label="Result", type="pil", interactive=False)
                        save_btn = gr.Button("💾 Save to exports", size="sm")

            with gr.Tab("✏️ Edit"):
                with gr.Row():
                    with gr.Column(scale=1):
                        edit_source = gr.Image(label="Image to edit", type="pil")
                        use_last_btn = gr.Button("↩️ Use last result", size="sm")
                        edit_mask = gr.Image(label="Sketch / mask (optional)", type="pil")
                        edit_prompt = gr.Textbox(
                            label="Edit instructions",
                            placeholder="Add a retro filter, remove the background person...",
                            lines=3
                        )
                        edit_btn = gr.Button("✏️ Apply edit", variant="primary")
                    with gr.Column(scale=1):
                        edit_output = gr.Image(label="Result", type="pil", interactive=False)

            with gr.Tab("🔍 Analyze"):
                with gr.Row():
                    with gr.Column(scale=1):
                        analyze_source = gr.Image(label="Garment photo", type="pil")
                        analyze_btn = gr.Button("🔍 Analyze", variant="primary")
                    with gr.Column(scale=1):
                        analysis_text = gr.Textbox(label="Description", lines=8)
                        use_prompt_btn = gr.Button("➡️ Use as generation prompt", size="sm")

            with gr.Tab("💬 Assistant"):
                chatbot = gr.Chatbot(label="Fashion Director", height=500, type="messages")
                chat_input = gr.Textbox(
                    label="Message",
                    placeholder="Suggest a campaign concept for a linen summer collection..."
                )
                with gr.Row():
                    send_btn = gr.Button("Send", variant="primary")
                    clear_btn = gr.Button("🗑️ Clear", variant="stop")
                    export_btn = gr.Button("💾 Export")
                export_file = gr.File(label="Download", visible=False)

        # Status bar
        status = gr.Markdown("")

        # Event handlers
        async def on_generate(
            prompt: str,
            version: str,
            ratio: str,
            size: str,
            product: Optional[Image.Image],
            model: Optional[Image.Image],
            background: Optional[Image.Image],
            progress=gr.Progress()
        ):
            """Handle image generation"""
            if not prompt.strip():
                raise gr.Error("Please enter a prompt")

            try:
                settings.validate()
            except ValueError as e:
                raise gr.Error(str(e))

            progress(0.2, desc="Contacting Gemini...")
            references = ReferenceImages(
                product=_to_data_uri(product),
                model=_to_data_uri(model),
                background=_to_data_uri(background),
            )

            try:
                result = await service.generate_fashion_image(prompt, ratio, size, references, version)
            except Exception as e:
                raise gr.Error(f"Generation error: {e}")

            progress(1.0, desc="Done!")
            return data_uri_to_image(result), result, "✅ Image generated"

        async def on_edit(
            source: Optional[Image.Image],
            mask: Optional[Image.Image],
            prompt: str
        ):
            """Handle image editing"""
            if source is None:
                raise gr.Error("Please provide an image to edit")
            if not prompt.strip():
                raise gr.Error("Please describe the edit")

            try:
                settings.validate()
            except ValueError as e:
                raise gr.Error(str(e))

            try:
                result = await service.edit_fashion_image(
                    image_to_data_uri(source),
                    prompt,
                    _to_data_uri(mask)
                )
            except Exception as e:
                raise gr.Error(f"Edit error: {e}")

            return data_uri_to_image(result), result, "✅ Edit applied"

        def on_use_last(image_uri: Optional[str]):
            """Load the last result into the editor"""
            if not image_uri:
                raise gr.Error("No image generated yet")
            return data_uri_to_image(image_uri)

        async def on_analyze(source: Optional[Image.Image]):
            """Handle garment analysis"""
            if source is None:
                raise gr.Error("Please upload a photo")
            description = await service.analyze_image(image_to_data_uri(source))
            return description, "✅ Analysis complete"

        def on_save(image_uri: Optional[str], prompt: str):
            """Save the last result to the export directory"""
            if not image_uri:
                raise gr.Error("No image generated yet")
            path = save_generated_image(image_uri, prompt)
            return f"✅ Saved to {path}"

        async def on_send(message: str, conv: Optional[AssistantConversation]):
            """Send a message to the assistant"""
            if not message.strip():
                raise gr.Error("Please enter a message")

            try:
                settings.validate()
            except ValueError as e:
                raise gr.Error(str(e))

            if conv is None:
                conv = AssistantConversation(service)

            try:
                await conv.send(message)
            except Exception as e:
                logger.error("Assistant error: %s", e)
                raise gr.Error(f"Assistant error: {e}")

            return conv, conv.get_display_history(), ""

        def on_clear(conv: Optional[AssistantConversation]):
            """Clear the assistant conversation"""
            if conv is not None:
                conv.clear_history()
            return conv, [], "✅ Conversation cleared"

        def on_export(conv: Optional[AssistantConversation]):
            """Export the assistant conversation"""
            if conv is None or not conv.get_history():
                raise gr.Error("No conversation yet")
            filename = save_conversation(conv.get_history())
            return gr.update(value=filename, visible=True), "✅ Exported"

        # Wire up events
        generate_btn.click(
            fn=on_generate,
            inputs=[gen_prompt, model_version, aspect_ratio, resolution, product_ref, model_ref, background_ref],
            outputs=[gen_output, last_image, status]
        )

        edit_btn.click(
            fn=on_edit,
            inputs=[edit_source, edit_mask, edit_prompt],
            outputs=[edit_output, last_image, status]
        )

        use_last_btn.click(
            fn=on_use_last,
            inputs=[last_image],
            outputs=[edit_source]
        )

        save_btn.click(
            fn=on_save,
            inputs=[last_image, gen_prompt],
            outputs=[status]
        )

        analyze_btn.click(
            fn=on_analyze,
            inputs=[analyze_source],
            outputs=[analysis_text, status]
        )

        use_prompt_btn.click(
            fn=lambda text: text,
            inputs=[analysis_text],
            outputs=[gen_prompt]
        )

        send_btn.click(
            fn=on_send,
            inputs=[chat_input, conversation],
            outputs=[conversation, chatbot, chat_input]
        )

        chat_input.submit(
            fn=on_send,
            inputs=[chat_input, conversation],
            outputs=[conversation, chatbot, chat_input]
        )

        clear_btn.click(
            fn=on_clear,
            inputs=[conversation],
            outputs=[conversation, chatbot, status]
        )

        export_btn.click(
            fn=on_export,
            inputs=[conversation],
            outputs=[export_file, status]
        )

    return app


def launch_app():
    """Launch the Gradio application"""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    app = create_app()

    app.launch(
        server_name=settings.host,
        server_port=settings.port,
        share=settings.share,
        show_error=True,
        inbrowser=False
    )


if __name__ == "__main__":
    launch_app()
