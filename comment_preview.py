#!/usr/bin/env python3
"""
Comment preview for the YouTube MCP Server.

Fetches comments for a video through the same dispatcher the MCP server uses,
prints them, and compares the size of the optimized MCP response with the size
of the full YouTube API response.

Usage:
    YOUTUBE_API_KEY=your_key python comment_preview.py "https://www.youtube.com/watch?v=VIDEO_ID"
    python comment_preview.py dQw4w9WgXcQ --max-results 10
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

from config.logging_config import setup_logging
from config.settings import ConfigurationError, get_settings
from mcp_integration.dispatcher import ToolCallResponse, create_tool_dispatcher
from mcp_integration.tool_registry import create_mcp_tool_registry
from services import create_services
from services.identifiers import get_video_id_from_url
from services.projections import payload_size
from services.youtube_client import clamp_max_results, describe_error

SEPARATOR = "=" * 80
DIVIDER = "-" * 80
BYTES_PER_TOKEN = 4


def format_comment(comment: Dict[str, Any], index: int) -> str:
    """Format one optimized {parentId, text} comment for display."""
    return f"""
{DIVIDER}
Comment {index}:
Parent ID: {comment.get('parentId', '')}
{DIVIDER}
{comment.get('text', '')}
"""


def size_comparison(full_response: Dict[str, Any], optimized: ToolCallResponse) -> Dict[str, Any]:
    """
    Compare the full API payload with the optimized MCP response.

    Args:
        full_response: Raw commentThreads.list response
        optimized: Dispatcher response for the same comments

    Returns:
        Sizes in bytes, reduction percentage and estimated tokens saved
    """
    full_envelope = ToolCallResponse.success({
        "comments": full_response.get("items") or [],
        "pageInfo": full_response.get("pageInfo") or {},
    })
    full_size = payload_size(full_envelope.to_dict())
    optimized_size = payload_size(optimized.to_dict())
    reduction = (1 - optimized_size / full_size) * 100 if full_size else 0.0

    return {
        "fullSize": full_size,
        "optimizedSize": optimized_size,
        "reductionPercent": round(reduction, 2),
        "tokensSaved": round((full_size - optimized_size) / BYTES_PER_TOKEN),
    }


async def run_preview(video_input: str, max_results: int) -> int:
    """Fetch, print and measure comments. Returns the process exit code."""
    video_id = get_video_id_from_url(video_input)
    if not video_id:
        print(
            "Error: Invalid YouTube URL or video ID. Please provide a valid URL like:\n"
            "  - https://www.youtube.com/watch?v=dQw4w9WgXcQ\n"
            "  - https://youtu.be/dQw4w9WgXcQ\n"
            "  - dQw4w9WgXcQ",
            file=sys.stderr,
        )
        return 1

    try:
        settings = get_settings()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Please set your YouTube API key:\n  export YOUTUBE_API_KEY=your_api_key_here", file=sys.stderr)
        return 1

    services = create_services(settings)
    dispatcher = create_tool_dispatcher(create_mcp_tool_registry(services))
    response = await dispatcher.dispatch(
        "comments_getVideoComments",
        {"videoId": video_id, "maxResults": max_results, "textFormat": "plainText"},
    )
    if response.is_error:
        print(f"Error: {response.message}", file=sys.stderr)
        return 1

    result = response.payload()
    comments: List[Dict[str, Any]] = result.get("comments") or []
    page_info = result.get("pageInfo") or {}

    if not comments:
        print("No comments found for this video")
        return 0

    print(f"Video ID: {video_id}")
    print(f"Fetched {len(comments)} comments")
    print(f"Total comments on video: {page_info.get('totalResults', 'Unknown')}")
    print(SEPARATOR)
    for index, comment in enumerate(comments, 1):
        print(format_comment(comment, index))

    print(SEPARATOR)
    print("OPTIMIZED MCP SERVER RESPONSE")
    print(SEPARATOR)
    print(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))

    # Same request again, unprojected, to measure what the projection saved
    try:
        full_response = await services.client.execute(
            "commentThreads",
            part="snippet,replies",
            videoId=video_id,
            maxResults=clamp_max_results(max_results, "comments"),
            textFormat="plainText",
            order="relevance",
        )
    except Exception as e:
        print(f"Error: {describe_error(e)}", file=sys.stderr)
        return 1
    sizes = size_comparison(full_response, response)

    print(SEPARATOR)
    print("SIZE COMPARISON")
    print(SEPARATOR)
    print(f"Full response size: {sizes['fullSize']} bytes")
    print(f"Optimized response size: {sizes['optimizedSize']} bytes")
    print(f"Reduction: {sizes['reductionPercent']}% smaller")
    print(f"Tokens saved: ~{sizes['tokensSaved']} tokens (estimated)")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Preview optimized YouTube comments")
    parser.add_argument("video", help="YouTube URL or video ID")
    parser.add_argument("--max-results", type=int, default=10, help="Number of comments (default: 10)")
    args = parser.parse_args(argv)

    setup_logging("WARNING")
    sys.exit(asyncio.run(run_preview(args.video, args.max_results)))


if __name__ == "__main__":
    main()
